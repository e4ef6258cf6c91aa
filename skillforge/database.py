"""
Database engine, session factory and schema bootstrap
"""
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from skillforge.config import settings

logger = logging.getLogger(__name__)

# In-memory SQLite must share one connection across sessions
engine_kwargs = {}
if settings.DATABASE_URL.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    if settings.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool
else:
    engine_kwargs.update(pool_pre_ping=True, pool_size=10, max_overflow=20, pool_recycle=3600)

engine = create_engine(settings.DATABASE_URL, echo=False, **engine_kwargs)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def init_db():
    """Create tables and seed demo data on an empty database"""
    # Models must be imported so they register with Base.metadata
    import skillforge.models  # noqa: F401
    from skillforge.seed import seed_demo_data

    Base.metadata.create_all(bind=engine)

    if settings.SEED_DEMO_DATA:
        seed_demo_data()
