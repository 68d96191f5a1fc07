"""
API router aggregator.
Includes all route modules.
"""
from fastapi import APIRouter
from gateway.api import auth, uploads, images

api_router = APIRouter()

# Routes live at the root; the mobile client and stored display URLs depend on these paths
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(uploads.router, tags=["uploads"])
api_router.include_router(images.router, tags=["images"])
