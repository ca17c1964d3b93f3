"""API route modules."""

from routes.contact_routes import router as contact_router
from routes.health_routes import router as health_router
from routes.profile_routes import router as profile_router
from routes.projects_routes import router as projects_router
from routes.skills_routes import router as skills_router

__all__ = [
    "contact_router",
    "health_router",
    "profile_router",
    "projects_router",
    "skills_router",
]
