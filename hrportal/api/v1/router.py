# hrportal/api/v1/router.py
from fastapi import APIRouter
from hrportal.api.v1 import admin, auth

api_router = APIRouter()

api_router.include_router(auth.router,  prefix="/auth",  tags=["auth"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
