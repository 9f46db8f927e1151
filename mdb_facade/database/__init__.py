"""
Database layer.

Provides the Database facade, its alias table, and the pure builders
used to shape driver calls.
"""

from .facade import Database, database_session
from .mapping import CollectionMapping
from .operations import (
    build_aggregate_options,
    build_index_models,
    build_projection,
    build_update,
    is_strict_true,
)
from .options import ConnectOptions

__all__ = [
    # Facade
    "Database",
    "database_session",
    "ConnectOptions",
    # Aliasing
    "CollectionMapping",
    # Builders
    "build_projection",
    "build_update",
    "build_index_models",
    "build_aggregate_options",
    "is_strict_true",
]
