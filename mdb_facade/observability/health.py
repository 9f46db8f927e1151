"""
Health check for MDB_FACADE.

Pings the server through a connected Database facade and reports the
result as a HealthCheckResult.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pymongo.errors import (
    ConnectionFailure,
    OperationFailure,
    ServerSelectionTimeoutError,
)

from ..constants import DEFAULT_HEALTH_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health status enumeration."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheckResult:
    """Result of a health check."""

    name: str
    status: HealthStatus
    message: str
    details: dict[str, Any] | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


async def check_database_health(
    database: Any | None, timeout_seconds: float = DEFAULT_HEALTH_TIMEOUT_SECONDS
) -> HealthCheckResult:
    """
    Check the health of a Database facade's connection.

    Args:
        database: Database facade instance (or None)
        timeout_seconds: Timeout for the ping

    Returns:
        HealthCheckResult
    """
    if database is None or not database.is_connected:
        return HealthCheckResult(
            name="mongodb",
            status=HealthStatus.UNHEALTHY,
            message="MongoDB connection not established",
        )

    details = {"db_name": database.database_name, "timeout_seconds": timeout_seconds}
    try:
        await asyncio.wait_for(database.ping(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        logger.warning(f"MongoDB ping timed out after {timeout_seconds}s")
        return HealthCheckResult(
            name="mongodb",
            status=HealthStatus.UNHEALTHY,
            message=f"MongoDB ping timed out after {timeout_seconds}s",
            details=details,
        )
    except (ConnectionFailure, OperationFailure, ServerSelectionTimeoutError) as e:
        logger.warning(f"MongoDB health check failed: {e}")
        return HealthCheckResult(
            name="mongodb",
            status=HealthStatus.UNHEALTHY,
            message=f"MongoDB health check failed: {str(e)}",
            details=details,
        )

    return HealthCheckResult(
        name="mongodb",
        status=HealthStatus.HEALTHY,
        message="MongoDB connection is healthy",
        details=details,
    )
