"""
app/api/routers package marker.
"""

from app.api.routers.batches import router as batches_router
from app.api.routers.dictionaries import router as dictionaries_router

__all__ = [
    "batches_router",
    "dictionaries_router",
]
