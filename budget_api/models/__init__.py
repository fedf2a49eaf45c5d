from budget_api.db import Base
from budget_api.models.user import User
from budget_api.models.budget_item import BudgetItem

__all__ = [
    "Base",
    "User",
    "BudgetItem",
]
