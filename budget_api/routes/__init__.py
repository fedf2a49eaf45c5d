from fastapi import APIRouter

api_router = APIRouter()

# Import route modules here
from budget_api.routes import users, budget  # noqa: E402

api_router.include_router(users.router)
api_router.include_router(budget.router)
