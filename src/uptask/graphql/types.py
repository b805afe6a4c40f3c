"""GraphQL object and input types.

Learn: Separate input types (what clients send) from object types (what
they get back). Update inputs default every field to UNSET so a resolver
can tell "not sent" apart from "sent", and only forward what was sent.
"""

from datetime import datetime
from typing import Any, Optional

import strawberry

from uptask.auth.jwt import CallerIdentity
from uptask.db import models


# ─── Object types ───────────────────────────────────────

@strawberry.type
class User:
    id: strawberry.ID
    email: str
    name: str

    @classmethod
    def from_identity(cls, identity: CallerIdentity) -> "User":
        return cls(id=strawberry.ID(identity.id), email=identity.email, name=identity.name)


@strawberry.type
class Token:
    token: str


@strawberry.type
class Project:
    id: strawberry.ID
    name: str
    creator: strawberry.ID
    created_at: datetime

    @classmethod
    def from_model(cls, row: models.Project) -> "Project":
        return cls(
            id=strawberry.ID(row.id),
            name=row.name,
            creator=strawberry.ID(row.creator_id),
            created_at=row.created_at,
        )


@strawberry.type
class Task:
    id: strawberry.ID
    name: str
    status: bool
    project: strawberry.ID
    creator: strawberry.ID
    created_at: datetime

    @classmethod
    def from_model(cls, row: models.Task) -> "Task":
        return cls(
            id=strawberry.ID(row.id),
            name=row.name,
            status=row.status,
            project=strawberry.ID(row.project_id),
            creator=strawberry.ID(row.creator_id),
            created_at=row.created_at,
        )


# ─── Inputs ─────────────────────────────────────────────

@strawberry.input
class UserInput:
    name: str
    email: str
    password: str


@strawberry.input
class AuthInput:
    email: str
    password: str


@strawberry.input
class ProjectInput:
    name: str


@strawberry.input
class ProjectUpdateInput:
    name: Optional[str] = strawberry.UNSET

    def changes(self) -> dict[str, Any]:
        return supplied({"name": self.name})


@strawberry.input
class TaskInput:
    name: str
    project: strawberry.ID


@strawberry.input
class TaskUpdateInput:
    name: Optional[str] = strawberry.UNSET
    project: Optional[strawberry.ID] = strawberry.UNSET

    def changes(self) -> dict[str, Any]:
        return supplied({"name": self.name, "project_id": self.project})


def supplied(fields: dict[str, Any]) -> dict[str, Any]:
    """Drop fields the client left out (UNSET) or sent as null."""
    return {
        key: value
        for key, value in fields.items()
        if value is not strawberry.UNSET and value is not None
    }
