"""Ownership check shared by every owned-resource mutation.

Learn: Projects and tasks have exactly one creator, and only that user
may update or delete them. The check always runs in the same order:
existence first, then creator match. A missing resource is reported as
NotFound even to a caller who would not have owned it.
"""

from typing import Optional, Protocol

from uptask.errors import Forbidden, NotFound


class Owned(Protocol):
    creator_id: str


def ensure_owner(
    resource: Optional[Owned],
    caller_id: str,
    label: str,
    action: str = "edit",
) -> Owned:
    """Return `resource` if `caller_id` created it, raise otherwise.

    Creator ids are compared as strings so callers never have to care
    whether an id came from a token claim or from the store.
    """
    if resource is None:
        raise NotFound(f"{label.capitalize()} not found")
    if str(resource.creator_id) != str(caller_id):
        raise Forbidden(f"You do not have permission to {action} this {label}")
    return resource
