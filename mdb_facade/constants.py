"""
Constants for MDB_FACADE.

This module contains the shared defaults used across the codebase to avoid
magic numbers and improve maintainability.
"""

from typing import Final

# ============================================================================
# CONNECTION CONSTANTS
# ============================================================================

DEFAULT_MAX_POOL_SIZE: Final[int] = 50
"""Default maximum MongoDB connection pool size."""

DEFAULT_MIN_POOL_SIZE: Final[int] = 1
"""Default minimum MongoDB connection pool size."""

DEFAULT_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 5000
"""Default server selection timeout in milliseconds."""

MIN_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 1000
"""Lowest server selection timeout accepted by FacadeConfig.validate()."""

DEFAULT_APP_NAME: Final[str] = "MDB_FACADE"
"""Application name reported to the server in the connection handshake."""

# ============================================================================
# OPERATION CONSTANTS
# ============================================================================

DEFAULT_ALLOW_DISK_USE: Final[bool] = True
"""Whether aggregation pipelines may spill large intermediate results to disk."""

PROJECTION_INCLUDE: Final[int] = 1
"""Value used for each field of an inclusion projection."""

SET_OPERATOR: Final[str] = "$set"
"""Update operator used for merge (partial) updates."""

# ============================================================================
# HEALTH CHECK CONSTANTS
# ============================================================================

DEFAULT_HEALTH_TIMEOUT_SECONDS: Final[float] = 5.0
"""Default timeout for the database health check ping."""

# ============================================================================
# ERROR MESSAGES
# ============================================================================

ALREADY_CONNECTED_MESSAGE: Final[str] = "DB already connected"
NOT_AVAILABLE_MESSAGE: Final[str] = "DB not available"
