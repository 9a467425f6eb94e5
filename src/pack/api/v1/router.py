from fastapi import APIRouter
from pack.api.v1 import resources

api_router = APIRouter()
api_router.include_router(resources.router, prefix="/resources", tags=["resources"])
