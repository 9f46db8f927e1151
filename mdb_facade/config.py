"""
Configuration management for MDB_FACADE.

Configuration is optional: Database.connect() can always be called with
direct parameters. FacadeConfig reads the same settings from the
environment for applications that prefer that.
"""

import os

from .constants import (
    DEFAULT_ALLOW_DISK_USE,
    DEFAULT_MAX_POOL_SIZE,
    DEFAULT_MIN_POOL_SIZE,
    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    MIN_SERVER_SELECTION_TIMEOUT_MS,
)
from .database.options import ConnectOptions
from .exceptions import ConfigurationError


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def parse_collection_mapping(raw: str) -> dict[str, str]:
    """
    Parse an alias table written as ``alias=real,alias2=real2``.

    Raises:
        ConfigurationError: If an entry is not of the form ``alias=real``
    """
    mapping: dict[str, str] = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        alias, sep, real_name = entry.partition("=")
        if not sep or not alias.strip() or not real_name.strip():
            raise ConfigurationError(
                f"Invalid collection mapping entry '{entry}' (expected alias=collection)",
                config_key="MONGO_COLLECTION_MAPPING",
                config_value=raw,
            )
        mapping[alias.strip()] = real_name.strip()
    return mapping


class FacadeConfig:
    """
    MDB_FACADE configuration.

    Explicit arguments win over environment variables, which win over
    the defaults in ``constants``.

    Example:
        # Using environment variables
        config = FacadeConfig()
        db = Database.from_config(config)
        await db.connect_from_config(config)

        # Or using direct parameters
        config = FacadeConfig(mongo_uri="mongodb://localhost:27017", db_name="shop")
    """

    def __init__(
        self,
        mongo_uri: str | None = None,
        db_name: str | None = None,
        allow_disk_use: bool | None = None,
        max_pool_size: int | None = None,
        min_pool_size: int | None = None,
        server_selection_timeout_ms: int | None = None,
        collection_mapping: dict[str, str] | None = None,
    ):
        """
        Initialize configuration.

        Args:
            mongo_uri: MongoDB connection URI (defaults to MONGO_URI env var)
            db_name: Database name (defaults to DB_NAME env var)
            allow_disk_use: Aggregation disk spill (defaults to MONGO_ALLOW_DISK_USE or True)
            max_pool_size: Maximum connection pool size (defaults to MONGO_MAX_POOL_SIZE or 50)
            min_pool_size: Minimum connection pool size (defaults to MONGO_MIN_POOL_SIZE or 1)
            server_selection_timeout_ms: Server selection timeout in ms
                (defaults to MONGO_SERVER_SELECTION_TIMEOUT_MS or 5000)
            collection_mapping: Alias table (defaults to MONGO_COLLECTION_MAPPING,
                written as ``alias=real,alias2=real2``)
        """
        self.mongo_uri = mongo_uri or os.getenv("MONGO_URI", "")
        self.db_name = db_name or os.getenv("DB_NAME", "")
        self.allow_disk_use = (
            allow_disk_use
            if allow_disk_use is not None
            else _env_bool("MONGO_ALLOW_DISK_USE", DEFAULT_ALLOW_DISK_USE)
        )
        self.max_pool_size = max_pool_size or int(
            os.getenv("MONGO_MAX_POOL_SIZE", str(DEFAULT_MAX_POOL_SIZE))
        )
        self.min_pool_size = min_pool_size or int(
            os.getenv("MONGO_MIN_POOL_SIZE", str(DEFAULT_MIN_POOL_SIZE))
        )
        self.server_selection_timeout_ms = server_selection_timeout_ms or int(
            os.getenv(
                "MONGO_SERVER_SELECTION_TIMEOUT_MS", str(DEFAULT_SERVER_SELECTION_TIMEOUT_MS)
            )
        )
        if collection_mapping is not None:
            self.collection_mapping = dict(collection_mapping)
        else:
            self.collection_mapping = parse_collection_mapping(
                os.getenv("MONGO_COLLECTION_MAPPING", "")
            )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If required configuration is missing or invalid
        """
        if not self.mongo_uri:
            raise ConfigurationError(
                "mongo_uri is required (set MONGO_URI environment variable or pass directly)",
                config_key="mongo_uri",
            )

        if not self.db_name:
            raise ConfigurationError(
                "db_name is required (set DB_NAME environment variable or pass directly)",
                config_key="db_name",
            )

        if self.max_pool_size < 1:
            raise ConfigurationError(
                f"max_pool_size must be >= 1, got {self.max_pool_size}",
                config_key="max_pool_size",
                config_value=self.max_pool_size,
            )

        if self.min_pool_size < 1:
            raise ConfigurationError(
                f"min_pool_size must be >= 1, got {self.min_pool_size}",
                config_key="min_pool_size",
                config_value=self.min_pool_size,
            )

        if self.min_pool_size > self.max_pool_size:
            raise ConfigurationError(
                f"min_pool_size ({self.min_pool_size}) cannot be greater than "
                f"max_pool_size ({self.max_pool_size})",
                config_key="min_pool_size",
                config_value=self.min_pool_size,
            )

        if self.server_selection_timeout_ms < MIN_SERVER_SELECTION_TIMEOUT_MS:
            raise ConfigurationError(
                f"server_selection_timeout_ms must be >= {MIN_SERVER_SELECTION_TIMEOUT_MS}, "
                f"got {self.server_selection_timeout_ms}",
                config_key="server_selection_timeout_ms",
                config_value=self.server_selection_timeout_ms,
            )

    def to_connect_options(self) -> ConnectOptions:
        """
        Build the options for Database.connect().

        The alias table is not included; Database.from_config() preloads it.
        """
        return ConnectOptions(
            allow_disk_use=self.allow_disk_use,
            maxPoolSize=self.max_pool_size,
            minPoolSize=self.min_pool_size,
            serverSelectionTimeoutMS=self.server_selection_timeout_ms,
        )
