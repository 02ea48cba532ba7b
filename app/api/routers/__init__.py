"""
app/api/routers package marker.
"""

from app.api.routers.urls import router as urls_router

__all__ = [
    "urls_router",
]
