from __future__ import annotations

import hmac
from collections.abc import Iterator

from fastapi import Depends, Header, Request

from metropower.core.config import Settings
from metropower.core.errors import UnauthorizedError
from metropower.db.session import session_scope
from metropower.services.assignments import ResolverOptions
from metropower.services.store import SqlStore, Store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> Iterator[Store]:
    memory_store = getattr(request.app.state, "memory_store", None)
    if memory_store is not None:
        yield memory_store
        return
    with session_scope(request.app.state.engine) as session:
        yield SqlStore(session)


def get_resolver_options(settings: Settings = Depends(get_settings)) -> ResolverOptions:
    return ResolverOptions(
        strict_references=settings.strict_references,
        duplicate_policy=settings.duplicate_policy,
    )


def require_manager(
    settings: Settings = Depends(get_settings),
    authorization: str | None = Header(default=None),
) -> None:
    """Gate write endpoints on the configured manager token, if one is set."""
    expected = settings.manager_token
    if not expected:
        return
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not hmac.compare_digest(token.strip().encode(), expected.encode()):
        raise UnauthorizedError("Manager token required")


SETTINGS_DEP = Depends(get_settings)
STORE_DEP = Depends(get_store)
RESOLVER_OPTIONS_DEP = Depends(get_resolver_options)
MANAGER_DEP = Depends(require_manager)
