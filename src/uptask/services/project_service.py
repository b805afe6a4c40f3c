"""Project service — CRUD over the caller's own projects.

Learn: Service layer separates business logic from the GraphQL resolvers.
Resolvers pass the verified caller id in; services never trust a creator
coming from client input.
"""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from uptask.db.models import Project
from uptask.db.store import DocumentStore
from uptask.services.ownership import ensure_owner

logger = structlog.get_logger()

PROJECT_DELETED = "Project deleted"


class ProjectService:
    """Business logic for projects."""

    def __init__(self, db: AsyncSession):
        self.projects = DocumentStore(db, Project)

    async def list_projects(self, caller_id: str) -> list[Project]:
        return await self.projects.find(creator_id=caller_id)

    async def create_project(self, name: str, caller_id: str) -> Project:
        project = await self.projects.insert(
            Project(name=name, creator_id=caller_id)
        )
        logger.info("project.created", project_id=project.id, creator_id=caller_id)
        return project

    async def update_project(
        self, project_id: str, changes: dict[str, Any], caller_id: str
    ) -> Project:
        """Merge `changes` into a project the caller owns."""
        existing = await self.projects.find_by_id(project_id)
        ensure_owner(existing, caller_id, "project", "edit")

        project = await self.projects.update_by_id(project_id, changes)
        logger.info("project.updated", project_id=project_id, fields=sorted(changes))
        return project

    async def delete_project(self, project_id: str, caller_id: str) -> str:
        # Tasks that reference this project are left untouched.
        existing = await self.projects.find_by_id(project_id)
        ensure_owner(existing, caller_id, "project", "delete")

        await self.projects.delete_by_id(project_id)
        logger.info("project.deleted", project_id=project_id)
        return PROJECT_DELETED
