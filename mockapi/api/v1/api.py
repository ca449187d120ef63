# === mockapi/api/v1/api.py ===
from fastapi import APIRouter
from .endpoints import mock_endpoints, access_keys

api_router = APIRouter()
api_router.include_router(mock_endpoints.router, tags=["Endpoints"])
api_router.include_router(access_keys.router, tags=["Access keys"])
