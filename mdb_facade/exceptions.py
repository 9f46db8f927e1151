"""
Custom exceptions for MDB_FACADE.

Only two error kinds are raised locally by the facade: duplicate connects
and operations attempted without a connection. Everything coming from the
driver is propagated unchanged.
"""

from typing import Any, Dict, Optional

from .constants import ALREADY_CONNECTED_MESSAGE, NOT_AVAILABLE_MESSAGE


class MongoFacadeError(RuntimeError):
    """
    Base exception for MDB_FACADE errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (db_name,
                 collection_name, operation, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class AlreadyConnectedError(MongoFacadeError):
    """
    Raised when connect() is called on a facade that is already connected
    or is in the middle of connecting.

    Attributes:
        db_name: Database name of the live (or pending) connection
    """

    def __init__(
        self,
        message: str = ALREADY_CONNECTED_MESSAGE,
        db_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if db_name:
            context["db_name"] = db_name
        super().__init__(message, context=context)
        self.db_name = db_name


class DatabaseNotAvailableError(MongoFacadeError):
    """
    Raised when an operation needs a connection and there is none.

    Attributes:
        operation: Facade operation that was attempted (if known)
        collection_name: Collection the operation targeted (if any)
    """

    def __init__(
        self,
        message: str = NOT_AVAILABLE_MESSAGE,
        operation: Optional[str] = None,
        collection_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if operation:
            context["operation"] = operation
        if collection_name:
            context["collection_name"] = collection_name
        super().__init__(message, context=context)
        self.operation = operation
        self.collection_name = collection_name


class ConfigurationError(MongoFacadeError):
    """
    Raised when configuration or the alias table is invalid.

    Attributes:
        config_key: Configuration key that caused the error (if available)
        config_value: Configuration value that caused the error (if available)
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = config_value
        super().__init__(message, context=context)
        self.config_key = config_key
        self.config_value = config_value
