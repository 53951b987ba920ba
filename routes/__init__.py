"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.calculate import router as calculate_router

__all__ = [
    "calculate_router",
]
