"""
Options accepted by Database.connect().

Recognized keys are validated by pydantic; anything else is kept as a
driver option and passed straight to AsyncIOMotorClient.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..constants import DEFAULT_ALLOW_DISK_USE


class ConnectOptions(BaseModel):
    """
    Connection options.

    Example:
        options = ConnectOptions(allow_disk_use=False, serverSelectionTimeoutMS=2000)
        options.driver_options()  # {"serverSelectionTimeoutMS": 2000}
    """

    model_config = ConfigDict(extra="allow")

    allow_disk_use: bool = Field(
        DEFAULT_ALLOW_DISK_USE,
        description="Let aggregation pipelines spill large intermediate results to disk",
    )
    collection_mapping: dict[str, str] = Field(
        default_factory=dict,
        description="Collection aliases merged into the facade on connect",
    )
    verify_connection: bool = Field(
        True,
        description="Ping the server before the connection is stored",
    )

    @classmethod
    def coerce(cls, options: "ConnectOptions | Mapping[str, Any] | None") -> "ConnectOptions":
        """Build options from None, a plain mapping, or an existing instance."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options))

    def driver_options(self) -> dict[str, Any]:
        """Return the passthrough keyword arguments for the Motor client."""
        return dict(self.model_extra or {})
