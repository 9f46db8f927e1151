"""
Unit tests for contextual logging.
"""

import logging

from mdb_facade.observability.logging import (
    ContextualLoggerAdapter,
    clear_correlation_id,
    db_context,
    get_correlation_id,
    get_logger,
    get_logging_context,
    set_correlation_id,
)


class TestCorrelationId:
    def test_generated_when_missing(self):
        correlation_id = set_correlation_id()
        try:
            assert correlation_id
            assert get_correlation_id() == correlation_id
        finally:
            clear_correlation_id()

    def test_explicit_and_clear(self):
        set_correlation_id("req-1")
        assert get_logging_context()["correlation_id"] == "req-1"

        clear_correlation_id()
        assert "correlation_id" not in get_logging_context()


class TestDbContext:
    def test_context_is_added_and_removed(self):
        with db_context(collection="users", operation="find"):
            context = get_logging_context()
            assert context["collection"] == "users"
            assert context["operation"] == "find"

        assert "collection" not in get_logging_context()

    def test_nested_context_extends_outer(self):
        with db_context(db_name="shop"):
            with db_context(collection="orders"):
                context = get_logging_context()
                assert context["db_name"] == "shop"
                assert context["collection"] == "orders"
            assert "collection" not in get_logging_context()


class TestContextualLoggerAdapter:
    def test_get_logger(self):
        adapter = get_logger("mdb_facade.test")

        assert isinstance(adapter, ContextualLoggerAdapter)
        assert adapter.logger.name == "mdb_facade.test"

    def test_records_carry_context(self, caplog):
        adapter = get_logger("mdb_facade.test")

        with caplog.at_level(logging.INFO, logger="mdb_facade.test"):
            with db_context(collection="users"):
                adapter.info("hello", extra={"db_name": "shop"})

        (record,) = caplog.records
        assert record.collection == "users"
        assert record.db_name == "shop"
        assert hasattr(record, "timestamp")
