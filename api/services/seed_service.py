"""Seed data for a fresh portfolio database.

Each table is only seeded while it is empty, so running the seed twice is
harmless.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.logger import get_logger
from models import SkillCategory, technologies_as_json
from repositories.profile_repository import ProfileRepository
from repositories.project_repository import ProjectRepository
from repositories.skill_repository import SkillRepository

logger = get_logger(__name__)

DEFAULT_PROFILE: dict[str, str] = {
    "name": "John Doe",
    "title": "Full Stack Developer",
    "bio": (
        "Passionate developer with expertise in modern web technologies "
        "including Python, TypeScript, and cloud infrastructure. I love building "
        "scalable applications and exploring new technologies."
    ),
    "email": "john.doe@example.com",
    "location": "Paris, France",
    "linkedin_url": "https://linkedin.com/in/johndoe",
    "github_url": "https://github.com/johndoe",
    "twitter_url": "https://twitter.com/johndoe",
}

# (name, category, level, years_experience, description)
DEFAULT_SKILLS: list[tuple[str, SkillCategory, int, int, str]] = [
    ("Python", SkillCategory.BACKEND, 5, 6, "APIs, data pipelines and tooling"),
    ("FastAPI", SkillCategory.BACKEND, 4, 3, "Async web services"),
    ("TypeScript", SkillCategory.FRONTEND, 5, 5, "Modern JavaScript development"),
    ("React", SkillCategory.FRONTEND, 4, 4, "Component-based UI development"),
    ("Svelte", SkillCategory.FRONTEND, 3, 2, "Lightweight reactive framework"),
    ("PostgreSQL", SkillCategory.DATABASE, 4, 4, "Relational database management"),
    ("SQLite", SkillCategory.DATABASE, 3, 2, "Embedded database solutions"),
    ("Docker", SkillCategory.DEVOPS, 4, 3, "Containerization and deployment"),
    ("Git", SkillCategory.TOOLS, 5, 6, "Version control and collaboration"),
    ("Linux", SkillCategory.TOOLS, 4, 5, "System administration and scripting"),
]

DEFAULT_PROJECTS: list[dict] = [
    {
        "title": "Portfolio Website",
        "description": "Modern portfolio website built with FastAPI and Svelte",
        "long_description": (
            "A full-stack portfolio application showcasing modern web development "
            "practices. Async Python backend with a Svelte and TypeScript frontend. "
            "Features include project management, skills showcase, and a contact form."
        ),
        "technologies": ["Python", "FastAPI", "Svelte", "TypeScript", "SQLite"],
        "github_url": "https://github.com/johndoe/portfolio",
        "demo_url": "https://johndoe.dev",
        "category": "web",
        "featured": True,
    },
    {
        "title": "Task Management API",
        "description": "RESTful API for task management with authentication",
        "long_description": (
            "A REST API for managing tasks and projects. Features JWT "
            "authentication, role-based access control, and comprehensive "
            "error handling."
        ),
        "technologies": ["Python", "FastAPI", "PostgreSQL", "JWT", "Docker"],
        "github_url": "https://github.com/johndoe/task-api",
        "demo_url": None,
        "category": "backend",
        "featured": True,
    },
    {
        "title": "Weather Dashboard",
        "description": "Real-time weather dashboard with interactive maps",
        "long_description": (
            "Interactive weather dashboard built with React and TypeScript. "
            "Integrates with multiple weather APIs to provide real-time weather "
            "data, forecasts, and interactive maps."
        ),
        "technologies": ["React", "TypeScript", "Node.js", "Express", "MongoDB"],
        "github_url": "https://github.com/johndoe/weather-dashboard",
        "demo_url": "https://weather.johndoe.dev",
        "category": "frontend",
        "featured": False,
    },
]


async def seed_profile(db: AsyncSession) -> bool:
    repo = ProfileRepository(db)
    if await repo.exists():
        logger.info("seed.profile.skipped")
        return False
    await repo.create_initial(**DEFAULT_PROFILE)
    logger.info("seed.profile.created")
    return True


async def seed_skills(db: AsyncSession) -> int:
    repo = SkillRepository(db)
    if await repo.count() > 0:
        logger.info("seed.skills.skipped")
        return 0
    for name, category, level, years, description in DEFAULT_SKILLS:
        await repo.create(
            name=name,
            category=category,
            level=level,
            years_experience=years,
            description=description,
        )
    logger.info("seed.skills.created", count=len(DEFAULT_SKILLS))
    return len(DEFAULT_SKILLS)


async def seed_projects(db: AsyncSession) -> int:
    repo = ProjectRepository(db)
    if await repo.count() > 0:
        logger.info("seed.projects.skipped")
        return 0
    for project in DEFAULT_PROJECTS:
        await repo.create(
            **{**project, "technologies": technologies_as_json(project["technologies"])}
        )
    logger.info("seed.projects.created", count=len(DEFAULT_PROJECTS))
    return len(DEFAULT_PROJECTS)


async def seed_database(db: AsyncSession) -> None:
    """Seed profile, skills and projects. Caller commits."""
    logger.info("seed.started")
    await seed_profile(db)
    await seed_skills(db)
    await seed_projects(db)
    logger.info("seed.completed")


async def run_seed(session_maker: async_sessionmaker[AsyncSession]) -> None:
    """Seed in a session of its own and commit."""
    async with session_maker() as session:
        try:
            await seed_database(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
