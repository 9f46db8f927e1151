"""
Collection name aliasing.

Callers address collections by short aliases; every collection-resolving
operation of the facade goes through CollectionMapping.resolve(), which
returns the real collection name or the name itself when no alias exists.

This module is part of MDB_FACADE.

Usage:
    from mdb_facade.database import CollectionMapping

    mapping = CollectionMapping({"users": "app_users_v2"})
    mapping.resolve("users")   # "app_users_v2"
    mapping.resolve("orders")  # "orders"
"""

import logging
from collections.abc import Iterator, Mapping

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _validated(aliases: Mapping[str, str]) -> dict[str, str]:
    if not isinstance(aliases, Mapping):
        raise ConfigurationError(
            "Collection mapping must be a mapping of alias to collection name",
            config_key="collection_mapping",
            config_value=type(aliases).__name__,
        )
    for alias, real_name in aliases.items():
        if not isinstance(alias, str) or not isinstance(real_name, str):
            raise ConfigurationError(
                "Collection aliases and names must be strings",
                config_key="collection_mapping",
                config_value=f"{alias!r}: {real_name!r}",
            )
        if not real_name:
            raise ConfigurationError(
                f"Alias '{alias}' maps to an empty collection name",
                config_key="collection_mapping",
            )
    return dict(aliases)


class CollectionMapping:
    """
    Alias table from caller-facing names to real collection names.

    Keys are unique; insertion order carries no meaning. Iterating yields
    the alias names currently known.
    """

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        self._aliases: dict[str, str] = _validated(aliases) if aliases else {}

    def resolve(self, name: str) -> str:
        """
        Resolve a collection reference.

        Args:
            name: Alias or real collection name

        Returns:
            The mapped real name, or ``name`` unchanged if it is not an alias
        """
        return self._aliases.get(name, name)

    def update(self, aliases: Mapping[str, str]) -> None:
        """Merge aliases into the table, overwriting existing keys."""
        validated = _validated(aliases)
        self._aliases.update(validated)
        logger.debug(f"Merged {len(validated)} collection alias(es)")

    def replace(self, aliases: Mapping[str, str]) -> None:
        """Swap the whole table for ``aliases``."""
        self._aliases = _validated(aliases)
        logger.debug(f"Replaced collection mapping ({len(self._aliases)} alias(es))")

    def as_dict(self) -> dict[str, str]:
        return dict(self._aliases)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._aliases))

    def __len__(self) -> int:
        return len(self._aliases)

    def __contains__(self, alias: object) -> bool:
        return alias in self._aliases

    def __repr__(self) -> str:
        return f"CollectionMapping({self._aliases!r})"
