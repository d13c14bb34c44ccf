"""Ownership guard for single-resource operations.

Every read, update or delete of one snippet goes through ``ensure_owner``.
"Does not exist" and "belongs to someone else" raise different exceptions
so they can be logged apart, but both derive from OwnershipError and are
answered identically at the HTTP boundary.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from uuid import UUID

from snippetbox.services.exceptions import (
    AccessDeniedError,
    OwnershipLookupTimeoutError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)

OwnerLookup = Callable[[UUID], Awaitable[UUID | None]]


async def ensure_owner(
    resource_id: UUID,
    caller: UUID,
    lookup_owner: OwnerLookup,
    timeout: float | None = None,
) -> None:
    """Raise unless ``caller`` owns ``resource_id``.

    Args:
        resource_id: Id of the resource being accessed
        caller: Authenticated identity of the requester
        lookup_owner: Storage call returning the stored owner, or None if absent
        timeout: Seconds to wait for the lookup (None waits indefinitely)

    Raises:
        ResourceNotFoundError: No resource with that id
        AccessDeniedError: Resource owned by a different identity
        OwnershipLookupTimeoutError: Lookup exceeded ``timeout``
    """
    context = {"resource_id": str(resource_id), "identity": str(caller)}
    try:
        owner = await asyncio.wait_for(lookup_owner(resource_id), timeout=timeout)
    except TimeoutError as e:
        logger.error(f"Owner lookup timed out for resource {resource_id}", extra=context)
        raise OwnershipLookupTimeoutError(f"Owner lookup timed out for {resource_id}") from e

    if owner is None:
        logger.info(f"Resource {resource_id} not found (requested by {caller})", extra=context)
        raise ResourceNotFoundError(resource_id, f"Resource {resource_id} not found")

    if owner != caller:
        logger.warning(
            f"Access denied: {caller} is not the owner of resource {resource_id}",
            extra=context,
        )
        raise AccessDeniedError(resource_id, f"Access denied to resource {resource_id}")
