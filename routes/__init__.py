"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.analysis import router as analysis_router
from routes.plants import router as plants_router

__all__ = [
    "analysis_router",
    "plants_router",
]
