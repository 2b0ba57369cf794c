"""API routes package."""

from fileserve.routes.file_routes import router as file_router

__all__ = ["file_router"]
