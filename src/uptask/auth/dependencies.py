"""FastAPI auth dependencies.

Learn: These are used as Depends() to extract the caller identity from
the request. Verification failures are NOT raised here: register and
authenticate must keep working even when a stale token is still sitting
in the client's headers. Instead the failure travels with the request
context and is raised by the first operation that needs an identity.
"""

from datetime import timedelta
from typing import Optional

from fastapi import Depends, Header

from uptask.auth.jwt import CallerIdentity, TokenService
from uptask.config import settings
from uptask.errors import InvalidToken


def get_token_service() -> TokenService:
    """FastAPI dependency — TokenService configured from settings."""
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.token_expire_minutes),
    )


class RequestAuth:
    """Outcome of reading the Authorization header for one request."""

    def __init__(
        self,
        identity: Optional[CallerIdentity] = None,
        error: Optional[InvalidToken] = None,
    ):
        self.identity = identity
        self.error = error


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the raw token out of an Authorization header value.

    Accepts "Bearer <token>" as well as a bare token.
    """
    if not authorization:
        return None
    scheme, _, rest = authorization.strip().partition(" ")
    if scheme.lower() == "bearer":
        return rest.strip() or None
    return scheme or None


def resolve_identity(
    authorization: Optional[str], tokens: TokenService
) -> RequestAuth:
    token = extract_token(authorization)
    if token is None:
        return RequestAuth()
    try:
        return RequestAuth(identity=tokens.verify(token))
    except InvalidToken as e:
        return RequestAuth(error=e)


async def get_request_auth(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> RequestAuth:
    """Resolve the caller for the current request (never raises)."""
    return resolve_identity(authorization, tokens)
