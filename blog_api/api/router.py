"""API router aggregation."""
from fastapi import APIRouter

from blog_api.api.endpoints import auth, posts

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(posts.router)
