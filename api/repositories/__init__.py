"""Repository layer for database operations.

Repositories encapsulate all database queries, keeping routes thin and focused
on HTTP handling. This separation provides:
- Single source of truth for database operations
- Storage errors translated to API errors in one place (log_slow_query)
- Cleaner services focused on business rules
"""

from repositories.contact_repository import ContactRepository
from repositories.profile_repository import ProfileRepository
from repositories.project_repository import ProjectRepository
from repositories.skill_repository import SkillRepository
from repositories.utils import log_slow_query

__all__ = [
    "ContactRepository",
    "ProfileRepository",
    "ProjectRepository",
    "SkillRepository",
    "log_slow_query",
]
