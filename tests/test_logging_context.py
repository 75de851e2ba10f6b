"""Tests for the per-search logging context."""

import pytest

from dupfinder.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    new_search_id,
)


def test_empty_context():
    assert get_log_context() == {}


def test_fields_bound_inside_block_only():
    with log_context(search_id="abc123", search_scope="jobs") as bound:
        assert bound == {"search_id": "abc123", "search_scope": "jobs"}
        assert get_log_context() == bound
    assert get_log_context() == {}


def test_nested_blocks_merge_and_shadow():
    with log_context(search_id="abc123", search_scope="all"):
        with log_context(search_scope="jobs"):
            assert get_log_context() == {"search_id": "abc123", "search_scope": "jobs"}
        assert get_log_context()["search_scope"] == "all"


def test_restored_on_exception():
    with pytest.raises(RuntimeError):
        with log_context(search_id="boom"):
            raise RuntimeError("fail")
    assert get_log_context() == {}


def test_get_returns_copy():
    with log_context(search_id="abc"):
        get_log_context()["search_id"] = "changed"
        assert get_log_context()["search_id"] == "abc"


def test_clear():
    with log_context(search_id="abc"):
        clear_log_context()
        assert get_log_context() == {}


def test_new_search_id():
    first, second = new_search_id(), new_search_id()
    assert len(first) == 12
    assert first != second
