"""Idempotent sample data for a fresh database.

Goes through the services so the usual write protocol (defaults, timestamp
touch, cache invalidation) applies to seeded rows too.
"""

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func, select

from devtrack.db.models.project import Project

if TYPE_CHECKING:
    from devtrack.container import Services

logger = structlog.get_logger(__name__)

SAMPLE_PROJECTS = [
    {
        "name": "E-Commerce Platform",
        "description": "Modern online store with cart and checkout",
        "status": "In Progress",
        "tech_stack": ["Next.js", "TypeScript", "Tailwind", "Stripe"],
        "features": [
            {
                "name": "Product Catalog",
                "description": "Display products with filtering and search",
                "priority": "High",
                "status": "Done",
                "effort_estimate": "8 hours",
                "tasks": [
                    {"title": "Create product grid component", "status": "Done", "effort_estimate": "2 hours"},
                    {"title": "Add filter sidebar", "status": "Done", "effort_estimate": "3 hours"},
                ],
                "decisions": [],
            },
            {
                "name": "Shopping Cart",
                "description": "Add to cart functionality with quantity management",
                "priority": "High",
                "status": "In Progress",
                "effort_estimate": "10 hours",
                "tasks": [
                    {"title": "Create cart context", "status": "Done", "effort_estimate": "2 hours"},
                    {"title": "Build cart drawer component", "status": "In Progress", "effort_estimate": "4 hours"},
                    {"title": "Add quantity controls", "status": "To Do", "effort_estimate": "2 hours"},
                ],
                "decisions": [
                    {
                        "text": "Use Zustand for cart state instead of Context API",
                        "pros": ["Fewer re-renders", "Simpler API", "Built-in persistence"],
                        "cons": ["Additional dependency", "Team needs to learn new library"],
                        "alternatives": "React Context, Redux",
                    },
                ],
            },
            {
                "name": "Stripe Integration",
                "description": "Payment processing with Stripe Checkout",
                "priority": "High",
                "status": "To Do",
                "effort_estimate": "15 hours",
                "tasks": [],
                "decisions": [],
            },
        ],
    },
    {
        "name": "Blog CMS",
        "description": "Markdown-based blog with admin panel",
        "status": "Planning",
        "tech_stack": ["Next.js", "MDX", "Supabase"],
        "features": [
            {"name": "MDX Parser", "description": "Parse and render markdown content", "tasks": [], "decisions": []},
            {"name": "Admin Dashboard", "description": "Create and edit posts", "tasks": [], "decisions": []},
        ],
    },
    {
        "name": "Weather Dashboard",
        "description": "Real-time weather data visualization",
        "status": "Launched",
        "tech_stack": ["React", "TypeScript", "OpenWeather API"],
        "features": [
            {
                "name": "Location Search",
                "description": "Search cities and display weather",
                "priority": "High",
                "status": "Done",
                "tasks": [{"title": "Implement search API", "status": "Done"}],
                "decisions": [],
            },
        ],
    },
]


async def seed_sample_data(services: "Services") -> int:
    """Insert SAMPLE_PROJECTS unless any project already exists.

    Returns the number of projects created.
    """
    async with services.projects.session_factory() as session:
        existing = (await session.execute(select(func.count(Project.id)))).scalar() or 0
    if existing:
        logger.info("seed_skipped", existing_projects=existing)
        return 0

    for project_data in SAMPLE_PROJECTS:
        features = project_data["features"]
        project = await services.projects.create(
            {k: v for k, v in project_data.items() if k != "features"}
        )
        for feature_data in features:
            feature = await services.features.create(
                project.id,
                {k: v for k, v in feature_data.items() if k not in ("tasks", "decisions")},
            )
            for task_data in feature_data["tasks"]:
                await services.tasks.create(feature.id, task_data)
            for decision_data in feature_data["decisions"]:
                await services.decisions.create(feature.id, decision_data)

    logger.info("seed_complete", projects=len(SAMPLE_PROJECTS))
    return len(SAMPLE_PROJECTS)
