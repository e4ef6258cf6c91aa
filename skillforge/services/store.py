"""
Key-value persistence collaborator backed by SQLAlchemy

Every entity collection is addressed the same way (list/get/create/update/delete
by collection and id), plus a credential map and a small local-storage table.
"""
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel
from sqlalchemy.orm import Session, sessionmaker

from skillforge.database import SessionLocal
from skillforge.errors import NotFound, ValidationError
from skillforge.models import User, Credential, Course, Quiz, QuizAttempt, KeyValue
from skillforge.schemas.user import Identity
from skillforge.schemas.course import Course as CourseSchema
from skillforge.schemas.quiz import Quiz as QuizSchema, QuizAttempt as QuizAttemptSchema

logger = logging.getLogger(__name__)


class Collection(str, Enum):
    USERS = "users"
    COURSES = "courses"
    QUIZZES = "quizzes"
    ATTEMPTS = "attempts"


# collection -> (ORM model, domain schema)
TABLES = {
    Collection.USERS: (User, Identity),
    Collection.COURSES: (Course, CourseSchema),
    Collection.QUIZZES: (Quiz, QuizSchema),
    Collection.ATTEMPTS: (QuizAttempt, QuizAttemptSchema),
}

JSON_FIELDS = {"topics", "questions", "answers"}

# Attempts are history: never rewritten
IMMUTABLE = {Collection.ATTEMPTS}


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _row_values(item: BaseModel) -> Dict[str, Any]:
    """Flatten a domain model into column values"""
    values = item.model_dump()
    json_values = item.model_dump(mode="json", include=JSON_FIELDS)
    for key, value in values.items():
        if key in JSON_FIELDS:
            values[key] = json_values[key]
        elif isinstance(value, Enum):
            values[key] = value.value
    return values


class Store:
    """Persistence collaborator; opens a short database session per call"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def _session(self):
        db: Session = self.session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # --- Generic CRUD ---

    def list_all(self, collection: Collection) -> List[BaseModel]:
        model, schema = TABLES[collection]
        with self._session() as db:
            rows = db.query(model).order_by(model.pk).all()
            return [schema.model_validate(row) for row in rows]

    def get_by_id(self, collection: Collection, item_id: str) -> Optional[BaseModel]:
        model, schema = TABLES[collection]
        with self._session() as db:
            row = db.query(model).filter(model.id == item_id).first()
            return schema.model_validate(row) if row else None

    def create(self, collection: Collection, item: BaseModel) -> BaseModel:
        model, schema = TABLES[collection]
        with self._session() as db:
            db.add(model(**_row_values(item)))
        logger.debug(f"Created {collection.value}/{item.id}")
        return item

    def update(self, collection: Collection, item: BaseModel) -> BaseModel:
        if collection in IMMUTABLE:
            raise ValidationError(f"{collection.value} records are immutable")

        model, schema = TABLES[collection]
        with self._session() as db:
            row = db.query(model).filter(model.id == item.id).first()
            if not row:
                raise NotFound(f"{collection.value}/{item.id} not found")
            for key, value in _row_values(item).items():
                setattr(row, key, value)
        logger.debug(f"Updated {collection.value}/{item.id}")
        return item

    def delete(self, collection: Collection, item_id: str) -> None:
        model, _ = TABLES[collection]
        with self._session() as db:
            row = db.query(model).filter(model.id == item_id).first()
            if not row:
                raise NotFound(f"{collection.value}/{item_id} not found")
            db.delete(row)
        logger.debug(f"Deleted {collection.value}/{item_id}")

    def find_user_by_email(self, email: str) -> Optional[Identity]:
        with self._session() as db:
            row = db.query(User).filter(User.email == email).first()
            return Identity.model_validate(row) if row else None

    # --- Credentials ---

    def verify_credential(self, email: str, secret: str) -> bool:
        with self._session() as db:
            row = db.query(Credential).filter(Credential.email == email).first()
            return row is not None and row.secret == secret

    def get_credential(self, email: str) -> Optional[str]:
        with self._session() as db:
            row = db.query(Credential).filter(Credential.email == email).first()
            return row.secret if row else None

    def set_credential(self, email: str, secret: str) -> None:
        with self._session() as db:
            row = db.query(Credential).filter(Credential.email == email).first()
            if row:
                row.secret = secret
            else:
                db.add(Credential(email=email, secret=secret))

    def delete_credential(self, email: str) -> None:
        with self._session() as db:
            db.query(Credential).filter(Credential.email == email).delete()

    # --- Local storage ---

    def get_value(self, key: str) -> Optional[str]:
        with self._session() as db:
            row = db.query(KeyValue).filter(KeyValue.key == key).first()
            return row.value if row else None

    def set_value(self, key: str, value: str) -> None:
        with self._session() as db:
            row = db.query(KeyValue).filter(KeyValue.key == key).first()
            if row:
                row.value = value
            else:
                db.add(KeyValue(key=key, value=value))

    def remove_value(self, key: str) -> None:
        with self._session() as db:
            db.query(KeyValue).filter(KeyValue.key == key).delete()


# Global instance
store = Store(SessionLocal)
