"""API route modules."""
from dispatch_ingestion.api.routes.uploads import router as uploads_router

__all__ = ["uploads_router"]
