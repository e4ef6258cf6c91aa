"""
User and credential models
"""
from sqlalchemy import Column, Integer, String, DateTime
from skillforge.database import Base


class User(Base):
    """
    Users table - identities with a role (student, mentor, admin)
    """
    __tablename__ = "users"

    pk = Column(Integer, primary_key=True, autoincrement=True)  # insertion order
    id = Column(String(64), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default="student")
    created_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"


class Credential(Base):
    """
    Credential map - email to plain secret (mock login, no hashing)
    """
    __tablename__ = "credentials"

    email = Column(String(255), primary_key=True)
    secret = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<Credential(email={self.email})>"
