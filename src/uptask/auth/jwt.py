"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. The token
carries the user's id, email and name, so resolvers never need to look
the user up again — the signature is the proof.

TokenService is built with its secret, algorithm and lifetime passed in,
which keeps tests free to use their own secret and short lifetimes.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from uptask.errors import ExpiredToken, InvalidToken

DEFAULT_TTL = timedelta(hours=4)


@dataclass(frozen=True)
class CallerIdentity:
    """The verified identity attached to a request."""

    id: str
    email: str
    name: str


class TokenService:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TTL,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: str, email: str, name: str) -> str:
        """Create a signed token for a user."""
        now = datetime.now(timezone.utc)
        payload = {
            "id": str(user_id),
            "email": email,
            "name": name,
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> CallerIdentity:
        """Verify and decode a token.

        Raises ExpiredToken once `exp` has passed and InvalidToken for
        anything else (bad signature, garbage input, missing claims).
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "id"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredToken("Token has expired")
        except jwt.InvalidTokenError as e:
            raise InvalidToken(f"Invalid token: {e}")

        return CallerIdentity(
            id=payload["id"],
            email=payload.get("email", ""),
            name=payload.get("name", ""),
        )
