"""
MDB_FACADE - MongoDB Facade

A thin async wrapper around Motor: connection lifecycle, collection
name aliasing, and pass-through CRUD, aggregation and index calls.
"""

from .config import FacadeConfig
from .database import CollectionMapping, ConnectOptions, Database, database_session
from .exceptions import (
    AlreadyConnectedError,
    ConfigurationError,
    DatabaseNotAvailableError,
    MongoFacadeError,
)

__version__ = "0.1.0"

__all__ = [
    # Database
    "Database",
    "database_session",
    "ConnectOptions",
    "CollectionMapping",
    # Configuration
    "FacadeConfig",
    # Errors
    "MongoFacadeError",
    "AlreadyConnectedError",
    "DatabaseNotAvailableError",
    "ConfigurationError",
]
