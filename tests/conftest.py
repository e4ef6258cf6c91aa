import os
import sys
import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Must be set before skillforge.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["REDIS_URL"] = "redis://localhost:6399/15"
os.environ["GEMINI_API_KEY"] = "test-key"
os.environ["SECRET_KEY"] = "test-secret"

from skillforge.database import Base, engine  # noqa: E402
from skillforge.seed import seed_demo_data  # noqa: E402
from skillforge.services.store import store as global_store  # noqa: E402
import skillforge.models  # noqa: E402,F401


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh in-memory schema for every test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store():
    return global_store


@pytest.fixture
def seeded(store):
    """Demo admin, mentor, student, two courses and the JavaScript quiz"""
    seed_demo_data(store)
    return store
