"""
API routers.
"""

from merchant_overlap.api.routers.overlap import router as overlap_router

__all__ = ["overlap_router"]
