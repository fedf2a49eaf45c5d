import uuid
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func
from budget_api.db import Base

DEFAULT_TAGS = ["Nonessential", "Grocery", "Pets", "Transportation"]
DEFAULT_THEME = "dark"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    # bcrypt hash, never the plain password
    password = Column(String, nullable=False)
    tags = Column(JSON, nullable=False, default=lambda: list(DEFAULT_TAGS))
    theme = Column(String, nullable=True, default=DEFAULT_THEME)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
