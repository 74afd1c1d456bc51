# api/v1/router.py
from fastapi import APIRouter

from . import dashboard, goals

api_router = APIRouter()

api_router.include_router(goals.router, prefix="/goals", tags=["Goals"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
