from fastapi import APIRouter

from cycling_photos.api.v1.endpoints import events, photos

api_router = APIRouter()

api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(photos.router, tags=["photos"])
