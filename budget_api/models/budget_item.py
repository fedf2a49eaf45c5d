import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON
from budget_api.db import Base
from budget_api.utils.date_utils import utcnow


class BudgetItem(Base):
    __tablename__ = "budget_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)
    item = Column(String, nullable=False)
    # Integer or integer string, stored as given
    amount = Column(JSON, nullable=False)
    event = Column(String, nullable=True)
    date = Column(DateTime, nullable=False, index=True)
    tag = Column(String, nullable=True)
    # Client-side so bulk inserts keep their order
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
