"""Per-search logging context.

Fields bound with ``log_context`` (search_id, search_scope) are stamped onto
every record emitted inside the block by ContextualFilter. Backed by a
ContextVar so concurrent searches keep their own fields.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator

_search_fields: ContextVar[Dict[str, Any]] = ContextVar("dupfinder_search_fields", default={})


def new_search_id() -> str:
    """Return a short random identifier for correlating one search's logs."""
    return uuid.uuid4().hex[:12]


def get_log_context() -> Dict[str, Any]:
    return dict(_search_fields.get())


def clear_log_context() -> None:
    _search_fields.set({})


@contextmanager
def log_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """Bind fields for the duration of the block; inner values shadow outer ones."""
    token = _search_fields.set({**_search_fields.get(), **fields})
    try:
        yield get_log_context()
    finally:
        _search_fields.reset(token)
