"""Per-request GraphQL context.

Learn: Strawberry calls get_context() once per request. Because it is a
FastAPI dependency itself, it can pull in the DB session and the token
service with Depends(), and tests can swap either one through
app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import BaseContext

from uptask.auth.dependencies import RequestAuth, get_request_auth, get_token_service
from uptask.auth.jwt import CallerIdentity, TokenService
from uptask.db.engine import get_db
from uptask.errors import Unauthorized


class UpTaskContext(BaseContext):
    """Everything a resolver needs: DB session, tokens, caller."""

    def __init__(self, db: AsyncSession, tokens: TokenService, auth: RequestAuth):
        super().__init__()
        self.db = db
        self.tokens = tokens
        self.auth = auth

    def require_identity(self) -> CallerIdentity:
        """The verified caller, or the reason there isn't one."""
        if self.auth.error is not None:
            raise self.auth.error
        if self.auth.identity is None:
            raise Unauthorized("Authentication required")
        return self.auth.identity


async def get_context(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    auth: RequestAuth = Depends(get_request_auth),
) -> UpTaskContext:
    return UpTaskContext(db=db, tokens=tokens, auth=auth)
