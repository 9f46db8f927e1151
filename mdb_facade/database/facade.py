"""
Database facade.

A thin wrapper around a Motor client that owns one connection, resolves
collection aliases, and forwards CRUD, aggregation, index and drop calls
to the driver. Driver errors are never caught or translated here; the
only locally raised errors are AlreadyConnectedError and
DatabaseNotAvailableError.

This module is part of MDB_FACADE.

Usage:
    from mdb_facade.database import Database, database_session

    async with database_session("mongodb://localhost:27017", "shop",
                                mapping={"users": "app_users_v2"}) as db:
        await db.insert("users", {"name": "Ada"})
        docs = await db.find("users", {"name": "Ada"}, ["name"]).to_list(length=None)
        await db.update("users", {"name": "Ada"}, {"active": True})
"""

import logging
from collections.abc import AsyncIterator, Iterator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorCommandCursor,
    AsyncIOMotorCursor,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError
from pymongo.results import (
    DeleteResult,
    InsertManyResult,
    InsertOneResult,
    UpdateResult,
)

from ..constants import (
    DEFAULT_ALLOW_DISK_USE,
    DEFAULT_APP_NAME,
    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
)
from ..exceptions import AlreadyConnectedError, DatabaseNotAvailableError
from ..observability import db_context
from ..observability import get_logger as get_contextual_logger
from ..observability import timed_operation
from .mapping import CollectionMapping
from .operations import (
    build_aggregate_options,
    build_index_models,
    build_projection,
    build_update,
    is_strict_true,
)
from .options import ConnectOptions

if TYPE_CHECKING:
    from ..config import FacadeConfig

logger = logging.getLogger(__name__)
contextual_logger = get_contextual_logger(__name__)


class Database:
    """
    Facade over a single MongoDB database.

    Holds at most one live connection. Every operation that names a
    collection resolves it through the alias table first; unmapped names
    are used as-is.
    """

    def __init__(self, mapping: Mapping[str, str] | None = None) -> None:
        """
        Initialize an unconnected facade.

        Args:
            mapping: Optional initial alias table (alias -> real collection name)
        """
        self._mapping = CollectionMapping(mapping)

        # Connection state
        self._client: AsyncIOMotorClient | None = None
        self._db: AsyncIOMotorDatabase | None = None
        self._db_name: str | None = None
        self._connecting_db_name: str | None = None
        self._allow_disk_use: bool = DEFAULT_ALLOW_DISK_USE

    @classmethod
    def from_config(cls, config: "FacadeConfig") -> "Database":
        """Build an unconnected facade with the config's alias table preloaded."""
        return cls(mapping=config.collection_mapping)

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    @timed_operation("db.connect")
    async def connect(
        self,
        url: str,
        database_name: str,
        options: ConnectOptions | Mapping[str, Any] | None = None,
    ) -> AsyncIOMotorDatabase:
        """
        Open the connection.

        Args:
            url: MongoDB connection URI
            database_name: Database to work with
            options: ConnectOptions or a mapping; unknown keys are passed to
                     AsyncIOMotorClient as driver options

        Returns:
            The Motor database handle

        Raises:
            AlreadyConnectedError: If a connection exists or is being opened
            PyMongoError: Propagated unchanged if the driver fails
        """
        if self._client is not None or self._connecting_db_name is not None:
            raise AlreadyConnectedError(db_name=self._db_name or self._connecting_db_name)

        # Claimed before the first await so a concurrent connect() fails fast
        self._connecting_db_name = database_name
        try:
            connect_options = ConnectOptions.coerce(options)
            # Validated up front; merged only once the handle is stored
            aliases = CollectionMapping(connect_options.collection_mapping)
            driver_options = connect_options.driver_options()
            driver_options.setdefault("appname", DEFAULT_APP_NAME)
            driver_options.setdefault(
                "serverSelectionTimeoutMS", DEFAULT_SERVER_SELECTION_TIMEOUT_MS
            )

            contextual_logger.info(
                "Opening MongoDB connection",
                extra={"db_name": database_name, "driver_options": sorted(driver_options)},
            )
            client = AsyncIOMotorClient(url, **driver_options)
            try:
                if connect_options.verify_connection:
                    await client.admin.command("ping")
            except PyMongoError as e:
                contextual_logger.error(
                    "MongoDB connection failed",
                    extra={
                        "db_name": database_name,
                        "error_type": type(e).__name__,
                        "error": str(e),
                    },
                    exc_info=True,
                )
                client.close()
                raise
            except BaseException:
                # Cancelled or timed out by the caller
                client.close()
                raise

            self._client = client
            self._db = client[database_name]
            self._db_name = database_name
            self._allow_disk_use = connect_options.allow_disk_use
            if aliases:
                self._mapping.update(aliases.as_dict())
        finally:
            self._connecting_db_name = None

        contextual_logger.info(
            "MongoDB connection opened",
            extra={"db_name": database_name, "aliases": len(self._mapping)},
        )
        return self._db

    async def connect_from_config(self, config: "FacadeConfig") -> AsyncIOMotorDatabase:
        """Validate a FacadeConfig and connect with its settings."""
        config.validate()
        return await self.connect(
            config.mongo_uri, config.db_name, config.to_connect_options()
        )

    @timed_operation("db.disconnect")
    async def disconnect(self) -> None:
        """
        Close the connection. Does nothing if there is none.
        """
        if self._client is None:
            return

        contextual_logger.info("Closing MongoDB connection", extra={"db_name": self._db_name})
        client = self._client
        self._client = None
        self._db = None
        self._db_name = None
        client.close()
        contextual_logger.info("MongoDB connection closed")

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def database_name(self) -> str | None:
        return self._db_name

    async def ping(self) -> dict[str, Any]:
        """Send a ping to the server over the live connection."""
        if self._client is None:
            raise DatabaseNotAvailableError(operation="ping")
        return await self._client.admin.command("ping")

    # ------------------------------------------------------------------
    # Collection aliasing
    # ------------------------------------------------------------------

    @property
    def mapping(self) -> dict[str, str]:
        """A copy of the alias table. Assigning replaces the whole table."""
        return self._mapping.as_dict()

    @mapping.setter
    def mapping(self, aliases: Mapping[str, str]) -> None:
        self._mapping.replace(aliases)

    def set_mapping(self, aliases: Mapping[str, str], replace: bool = False) -> None:
        """
        Merge aliases into the alias table.

        Args:
            aliases: alias -> real collection name
            replace: Swap the whole table instead of merging
        """
        if replace:
            self._mapping.replace(aliases)
        else:
            self._mapping.update(aliases)

    def resolve_collection_name(self, name: str) -> str:
        return self._mapping.resolve(name)

    def __iter__(self) -> Iterator[str]:
        """Iterate over the known alias names."""
        return iter(self._mapping)

    def get_collection(self, name: str) -> AsyncIOMotorCollection:
        """
        Get the Motor collection for an alias or collection name.

        Raises:
            DatabaseNotAvailableError: If not connected
        """
        return self._collection(name, "get_collection")

    def _collection(self, name: str, operation: str) -> AsyncIOMotorCollection:
        if self._db is None:
            raise DatabaseNotAvailableError(operation=operation, collection_name=name)
        real_name = self._mapping.resolve(name)
        logger.debug(f"{operation}: collection '{name}' resolved to '{real_name}'")
        return self._db[real_name]

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    @timed_operation("db.insert")
    async def insert(
        self, name: str, data: Mapping[str, Any] | Sequence[Mapping[str, Any]]
    ) -> InsertOneResult | InsertManyResult:
        """
        Insert one document, or many when ``data`` is a list or tuple.
        """
        collection = self._collection(name, "insert")
        if isinstance(data, (list, tuple)):
            return await collection.insert_many(list(data))
        return await collection.insert_one(data)

    @timed_operation("db.find")
    def find(
        self,
        name: str,
        filter: Mapping[str, Any] | None = None,
        fields: Sequence[str] | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> AsyncIOMotorCursor:
        """
        Build a query cursor.

        Args:
            name: Alias or collection name
            filter: Query filter (default: match everything)
            fields: List of field names to include, or a projection document
            **kwargs: Passed to the driver's find() (sort, limit, skip, ...)

        Returns:
            A new AsyncIOMotorCursor; iterate it or call ``to_list()``
        """
        collection = self._collection(name, "find")
        return collection.find(filter or {}, projection=build_projection(fields), **kwargs)

    @timed_operation("db.count")
    async def count(self, name: str, filter: Mapping[str, Any] | None = None) -> int:
        """Count the documents matching ``filter``."""
        collection = self._collection(name, "count")
        return await collection.count_documents(filter or {})

    @timed_operation("db.update")
    async def update(
        self,
        name: str,
        filter: Mapping[str, Any],
        value: Mapping[str, Any],
        multi: bool = False,
        replace: bool = False,
    ) -> UpdateResult:
        """
        Update matching documents.

        Only the literal ``True`` enables ``multi`` or ``replace``; other
        truthy values such as ``1`` or ``"true"`` are treated as False.

        Args:
            name: Alias or collection name
            filter: Query filter
            value: Fields to merge with ``$set``, or the replacement document
            multi: Update every match instead of the first one
            replace: Replace the document body instead of merging fields
        """
        collection = self._collection(name, "update")
        document = build_update(value, replace=replace, multi=multi)
        if is_strict_true(multi):
            return await collection.update_many(filter, document)
        if is_strict_true(replace):
            return await collection.replace_one(filter, document)
        return await collection.update_one(filter, document)

    @timed_operation("db.remove")
    async def remove(
        self, name: str, filter: Mapping[str, Any], multi: bool = False
    ) -> DeleteResult:
        """
        Delete the first matching document, or every match when ``multi``
        is the literal ``True``.
        """
        collection = self._collection(name, "remove")
        if is_strict_true(multi):
            return await collection.delete_many(filter)
        return await collection.delete_one(filter)

    # ------------------------------------------------------------------
    # Indexes, aggregation, drops
    # ------------------------------------------------------------------

    @timed_operation("db.indexes")
    async def indexes(self, name: str, index_specs: Sequence[Any]) -> list[str]:
        """
        Create indexes on a collection.

        Returns:
            Names of the created indexes
        """
        collection = self._collection(name, "indexes")
        return await collection.create_indexes(build_index_models(index_specs))

    @timed_operation("db.aggregate")
    def aggregate(
        self,
        name: str,
        pipeline: Sequence[Mapping[str, Any]],
        options: Mapping[str, Any] | None = None,
    ) -> AsyncIOMotorCommandCursor:
        """
        Run an aggregation pipeline.

        ``allowDiskUse`` defaults to the connection's ``allow_disk_use``
        setting; keys in ``options`` override it.
        """
        collection = self._collection(name, "aggregate")
        return collection.aggregate(
            list(pipeline), **build_aggregate_options(self._allow_disk_use, options)
        )

    @timed_operation("db.drop")
    async def drop(self, name: str) -> None:
        """Drop one collection."""
        if self._db is None:
            raise DatabaseNotAvailableError(operation="drop", collection_name=name)
        real_name = self._mapping.resolve(name)
        with db_context(collection=real_name, operation="drop"):
            await self._db.drop_collection(real_name)
            contextual_logger.info("Dropped collection")

    @timed_operation("db.drop_database")
    async def drop_database(self) -> None:
        """Drop the whole database."""
        if self._client is None:
            raise DatabaseNotAvailableError(operation="drop_database")
        with db_context(db_name=self._db_name, operation="drop_database"):
            await self._client.drop_database(self._db_name)
            contextual_logger.warning("Dropped database")

    # Alternate names
    open = connect
    close = disconnect
    get = get_collection
    get_collection_name = resolve_collection_name
    drop_db = drop_database


@asynccontextmanager
async def database_session(
    url: str,
    database_name: str,
    options: ConnectOptions | Mapping[str, Any] | None = None,
    mapping: Mapping[str, str] | None = None,
) -> AsyncIterator[Database]:
    """
    Connect a new Database facade for the duration of the block.

    Example:
        async with database_session(uri, "shop", mapping={"a": "b"}) as db:
            await db.count("a")
    """
    database = Database(mapping=mapping)
    await database.connect(url, database_name, options)
    try:
        yield database
    finally:
        await database.disconnect()
