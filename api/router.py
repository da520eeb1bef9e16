# api/router.py
from fastapi import APIRouter

from . import users, exercises

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["Users"])

# exercises live *under* the user resource
api_router.include_router(
    exercises.router,
    prefix="/users",          # results in /users/{user_id}/exercises|logs
    tags=["Exercises"],
)
