"""
KeyValue model - local storage for small client-side values
"""
from sqlalchemy import Column, String, Text
from skillforge.database import Base


class KeyValue(Base):
    """
    Key/value table - holds the persisted session token
    """
    __tablename__ = "key_values"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)

    def __repr__(self):
        return f"<KeyValue(key={self.key})>"
