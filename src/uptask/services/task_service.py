"""Task service — CRUD over the caller's own tasks.

Learn: Tasks are always listed per project, and always scoped to the
caller. Updates take the completion status as its own argument; it is
written on every update, so a client can never leave it out by accident.
"""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from uptask.db.models import Task
from uptask.db.store import DocumentStore
from uptask.services.ownership import ensure_owner

logger = structlog.get_logger()

TASK_DELETED = "Task deleted"


class TaskService:
    """Business logic for tasks."""

    def __init__(self, db: AsyncSession):
        self.tasks = DocumentStore(db, Task)

    async def list_tasks(self, caller_id: str, project_id: str) -> list[Task]:
        return await self.tasks.find(creator_id=caller_id, project_id=project_id)

    async def create_task(
        self, name: str, project_id: str, caller_id: str
    ) -> Task:
        task = await self.tasks.insert(
            Task(name=name, project_id=project_id, creator_id=caller_id)
        )
        logger.info(
            "task.created",
            task_id=task.id,
            project_id=project_id,
            creator_id=caller_id,
        )
        return task

    async def update_task(
        self,
        task_id: str,
        changes: dict[str, Any],
        status: bool,
        caller_id: str,
    ) -> Task:
        existing = await self.tasks.find_by_id(task_id)
        ensure_owner(existing, caller_id, "task", "edit")

        changes = {**changes, "status": status}
        task = await self.tasks.update_by_id(task_id, changes)
        logger.info("task.updated", task_id=task_id, status=status)
        return task

    async def delete_task(self, task_id: str, caller_id: str) -> str:
        existing = await self.tasks.find_by_id(task_id)
        ensure_owner(existing, caller_id, "task", "delete")

        await self.tasks.delete_by_id(task_id)
        logger.info("task.deleted", task_id=task_id)
        return TASK_DELETED
