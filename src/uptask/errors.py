"""Domain errors.

Learn: Every failure a client can see is an UpTaskError with a stable
machine-readable `code`. graphql-core copies an exception's `extensions`
dict onto the GraphQL error it builds, so resolvers just raise these and
clients get `errors[0].extensions.code` for free.
"""


class UpTaskError(Exception):
    """Base class for all client-visible failures."""

    code = "INTERNAL_ERROR"

    @property
    def extensions(self) -> dict:
        return {"code": self.code}


# ─── Credentials ────────────────────────────────────────

class DuplicateIdentity(UpTaskError):
    """An account with this email already exists."""

    code = "DUPLICATE_IDENTITY"


class UnknownIdentity(UpTaskError):
    """No account matches the email."""

    code = "UNKNOWN_IDENTITY"


class InvalidCredential(UpTaskError):
    """Password does not match the stored hash."""

    code = "INVALID_CREDENTIAL"


# ─── Tokens / caller identity ──────────────────────────

class Unauthorized(UpTaskError):
    code = "UNAUTHORIZED"


class InvalidToken(UpTaskError):
    code = "INVALID_TOKEN"


class ExpiredToken(InvalidToken):
    code = "EXPIRED_TOKEN"


# ─── Owned resources ───────────────────────────────────

class NotFound(UpTaskError):
    code = "NOT_FOUND"


class Forbidden(UpTaskError):
    code = "FORBIDDEN"


# ─── Persistence ───────────────────────────────────────

class StorageError(UpTaskError):
    """The document store failed to complete a read or write."""

    code = "STORAGE_ERROR"


class DuplicateDocumentError(StorageError):
    """Insert rejected by a unique index."""
