"""Unit tests for the ownership guard."""

import asyncio
import logging
from uuid import uuid4

import pytest

from snippetbox.services.exceptions import (
    AccessDeniedError,
    OwnershipError,
    OwnershipLookupTimeoutError,
    ResourceNotFoundError,
)
from snippetbox.services.ownership import ensure_owner


def _lookup(owners: dict):
    async def lookup_owner(resource_id):
        return owners.get(resource_id)

    return lookup_owner


@pytest.mark.asyncio
async def test_owner_passes():
    owner, resource = uuid4(), uuid4()
    await ensure_owner(resource, owner, _lookup({resource: owner}))


@pytest.mark.asyncio
async def test_missing_resource(caplog):
    resource = uuid4()

    with caplog.at_level(logging.INFO, logger="snippetbox.services.ownership"):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            await ensure_owner(resource, uuid4(), _lookup({}))

    assert exc_info.value.resource_id == resource
    assert any(r.levelno == logging.INFO and "not found" in r.message for r in caplog.records)


@pytest.mark.asyncio
async def test_other_owner_denied(caplog):
    owner, intruder, resource = uuid4(), uuid4(), uuid4()

    with caplog.at_level(logging.INFO, logger="snippetbox.services.ownership"):
        with pytest.raises(AccessDeniedError) as exc_info:
            await ensure_owner(resource, intruder, _lookup({resource: owner}))

    assert exc_info.value.resource_id == resource
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert str(intruder) in warnings[0].message
    assert warnings[0].resource_id == str(resource)
    assert warnings[0].identity == str(intruder)


@pytest.mark.asyncio
async def test_both_failures_share_a_base():
    resource = uuid4()

    for owners in ({}, {resource: uuid4()}):
        with pytest.raises(OwnershipError):
            await ensure_owner(resource, uuid4(), _lookup(owners))


@pytest.mark.asyncio
async def test_lookup_timeout():
    async def slow_lookup(resource_id):
        await asyncio.sleep(1)
        return None

    with pytest.raises(OwnershipLookupTimeoutError):
        await ensure_owner(uuid4(), uuid4(), slow_lookup, timeout=0.01)


@pytest.mark.asyncio
async def test_lookup_errors_propagate():
    async def broken_lookup(resource_id):
        raise RuntimeError("storage down")

    with pytest.raises(RuntimeError):
        await ensure_owner(uuid4(), uuid4(), broken_lookup)


def test_timeout_is_not_an_ownership_error():
    """A timeout must not be reported as not-found."""
    assert not issubclass(OwnershipLookupTimeoutError, OwnershipError)
