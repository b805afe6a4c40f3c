"""Auth service — registration and sign-in.

Learn: Registration stores a bcrypt hash (never the password) and returns
a plain acknowledgment. Sign-in is the only place tokens are minted.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from uptask.auth.jwt import TokenService
from uptask.auth.password import hash_password, verify_password
from uptask.db.models import User
from uptask.db.store import DocumentStore
from uptask.errors import (
    DuplicateDocumentError,
    DuplicateIdentity,
    InvalidCredential,
    UnknownIdentity,
)

logger = structlog.get_logger()

REGISTERED = "User created successfully"


class AuthService:
    """Business logic for accounts and tokens."""

    def __init__(self, db: AsyncSession, tokens: TokenService):
        self.users = DocumentStore(db, User)
        self.tokens = tokens

    async def register(self, email: str, password: str, name: str) -> str:
        if await self.users.find_one(email=email):
            raise DuplicateIdentity("User is already registered")

        user = User(email=email, name=name, password_hash=hash_password(password))
        try:
            await self.users.insert(user)
        except DuplicateDocumentError:
            # Lost a race with a concurrent registration for the same email.
            raise DuplicateIdentity("User is already registered")

        logger.info("auth.user_registered", user_id=user.id)
        return REGISTERED

    async def authenticate(self, email: str, password: str) -> str:
        """Check credentials and return a signed token."""
        user = await self.users.find_one(email=email)
        if user is None:
            raise UnknownIdentity("User does not exist")

        if not verify_password(password, user.password_hash):
            logger.info("auth.bad_password", user_id=user.id)
            raise InvalidCredential("Incorrect password")

        logger.info("auth.user_authenticated", user_id=user.id)
        return self.tokens.issue(user.id, user.email, user.name)
