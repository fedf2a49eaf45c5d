from budget_api.schemas.budget import BudgetItemCreate, BudgetItemUpdate, BulkInsertRequest
from budget_api.schemas.user import UserRegister, UserLogin, UserUpdate, UserResponse, AuthResponse

__all__ = [
    "BudgetItemCreate",
    "BudgetItemUpdate",
    "BulkInsertRequest",
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "AuthResponse",
]
