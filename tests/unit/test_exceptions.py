"""
Unit tests for custom exceptions.

Tests exception hierarchy and error messages.
"""

from mdb_facade.exceptions import (
    AlreadyConnectedError,
    ConfigurationError,
    DatabaseNotAvailableError,
    MongoFacadeError,
)


class TestExceptionHierarchy:
    def test_base_is_runtime_error(self):
        assert isinstance(MongoFacadeError("test error"), RuntimeError)

    def test_subclasses(self):
        for error in (
            AlreadyConnectedError(),
            DatabaseNotAvailableError(),
            ConfigurationError("bad"),
        ):
            assert isinstance(error, MongoFacadeError)
            assert isinstance(error, RuntimeError)


class TestExceptionMessages:
    def test_base_message_without_context(self):
        error = MongoFacadeError("Something went wrong")

        assert str(error) == "Something went wrong"
        assert error.context == {}

    def test_base_message_with_context(self):
        error = MongoFacadeError("Something went wrong", context={"collection": "users"})

        assert str(error) == "Something went wrong (context: collection=users)"

    def test_already_connected_defaults(self):
        error = AlreadyConnectedError(db_name="shop")

        assert error.message == "DB already connected"
        assert error.db_name == "shop"
        assert error.context == {"db_name": "shop"}

    def test_not_available_defaults(self):
        error = DatabaseNotAvailableError(operation="find", collection_name="users")

        assert error.message == "DB not available"
        assert error.operation == "find"
        assert error.collection_name == "users"
        assert "operation=find" in str(error)

    def test_not_available_without_context(self):
        assert str(DatabaseNotAvailableError()) == "DB not available"

    def test_configuration_error_context(self):
        error = ConfigurationError("bad pool", config_key="max_pool_size", config_value=0)

        assert error.context == {"config_key": "max_pool_size", "config_value": 0}
