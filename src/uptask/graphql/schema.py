"""GraphQL schema — queries, mutations, and the FastAPI router.

Learn: Every resolver follows the same three steps:
1. Resolve the caller (protected operations only)
2. Call the service with plain Python values
3. Convert ORM rows to GraphQL types

register and authenticate are the only operations that work without a
verified caller.
"""

from typing import Optional

import strawberry
import structlog
from graphql import GraphQLError
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext, Info

from uptask.config import settings
from uptask.errors import UpTaskError
from uptask.graphql.context import UpTaskContext, get_context
from uptask.graphql.types import (
    AuthInput,
    Project,
    ProjectInput,
    ProjectUpdateInput,
    Task,
    TaskInput,
    TaskUpdateInput,
    Token,
    User,
    UserInput,
)
from uptask.services.auth_service import AuthService
from uptask.services.project_service import ProjectService
from uptask.services.task_service import TaskService

logger = structlog.get_logger()

Ctx = Info[UpTaskContext, None]


@strawberry.type
class Query:
    @strawberry.field
    def current_user(self, info: Ctx) -> User:
        """The user the request's token was issued to."""
        return User.from_identity(info.context.require_identity())

    @strawberry.field
    async def list_projects(self, info: Ctx) -> list[Project]:
        caller = info.context.require_identity()
        rows = await ProjectService(info.context.db).list_projects(caller.id)
        return [Project.from_model(row) for row in rows]

    @strawberry.field
    async def list_tasks(self, info: Ctx, project: strawberry.ID) -> list[Task]:
        caller = info.context.require_identity()
        rows = await TaskService(info.context.db).list_tasks(caller.id, str(project))
        return [Task.from_model(row) for row in rows]


@strawberry.type
class Mutation:
    # ─── Accounts ───────────────────────────────────────

    @strawberry.mutation
    async def register(self, info: Ctx, input: UserInput) -> str:
        svc = AuthService(info.context.db, info.context.tokens)
        return await svc.register(input.email, input.password, input.name)

    @strawberry.mutation
    async def authenticate(self, info: Ctx, input: AuthInput) -> Token:
        svc = AuthService(info.context.db, info.context.tokens)
        return Token(token=await svc.authenticate(input.email, input.password))

    # ─── Projects ───────────────────────────────────────

    @strawberry.mutation
    async def create_project(self, info: Ctx, input: ProjectInput) -> Project:
        caller = info.context.require_identity()
        row = await ProjectService(info.context.db).create_project(input.name, caller.id)
        return Project.from_model(row)

    @strawberry.mutation
    async def update_project(
        self, info: Ctx, id: strawberry.ID, input: ProjectUpdateInput
    ) -> Project:
        caller = info.context.require_identity()
        row = await ProjectService(info.context.db).update_project(
            str(id), input.changes(), caller.id
        )
        return Project.from_model(row)

    @strawberry.mutation
    async def delete_project(self, info: Ctx, id: strawberry.ID) -> str:
        caller = info.context.require_identity()
        return await ProjectService(info.context.db).delete_project(str(id), caller.id)

    # ─── Tasks ──────────────────────────────────────────

    @strawberry.mutation
    async def create_task(self, info: Ctx, input: TaskInput) -> Task:
        caller = info.context.require_identity()
        row = await TaskService(info.context.db).create_task(
            input.name, str(input.project), caller.id
        )
        return Task.from_model(row)

    @strawberry.mutation
    async def update_task(
        self, info: Ctx, id: strawberry.ID, input: TaskUpdateInput, status: bool
    ) -> Task:
        caller = info.context.require_identity()
        row = await TaskService(info.context.db).update_task(
            str(id), input.changes(), status, caller.id
        )
        return Task.from_model(row)

    @strawberry.mutation
    async def delete_task(self, info: Ctx, id: strawberry.ID) -> str:
        caller = info.context.require_identity()
        return await TaskService(info.context.db).delete_task(str(id), caller.id)


class UpTaskSchema(strawberry.Schema):
    """Schema that logs expected failures quietly.

    Strawberry logs every resolver error with a traceback. NotFound or a
    wrong password is normal traffic, so those get one structured line;
    anything else still goes through Strawberry's logger.
    """

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        unexpected = []
        for error in errors:
            if isinstance(error.original_error, UpTaskError):
                logger.info(
                    "graphql.request_failed",
                    code=error.original_error.code,
                    message=error.message,
                    path=error.path,
                )
            else:
                unexpected.append(error)
        if unexpected:
            super().process_errors(unexpected, execution_context)


schema = UpTaskSchema(query=Query, mutation=Mutation)


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.graphiql else None,
    )
