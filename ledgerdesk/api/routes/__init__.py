from fastapi import APIRouter
from ledgerdesk.api.routes import admin, todos, transactions

api_router = APIRouter()
api_router.include_router(transactions.router, tags=["transactions"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(todos.router, prefix="/todos", tags=["todos"])
