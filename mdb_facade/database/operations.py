"""
Argument builders for facade operations.

Pure helpers that turn facade arguments into the documents the driver
expects. None of them touch a connection, so the update-mode decision
logic and projection handling can be tested on their own.

This module is part of MDB_FACADE.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pymongo import IndexModel

from ..constants import PROJECTION_INCLUDE, SET_OPERATOR


def is_strict_true(flag: Any) -> bool:
    """
    Check whether a mode flag is the literal boolean ``True``.

    Truthy values such as ``1`` or ``"true"`` do not count.
    """
    return flag is True


def build_projection(
    fields: Sequence[str] | Mapping[str, Any] | None,
) -> dict[str, Any] | None:
    """
    Build a find() projection from a field list or projection document.

    Args:
        fields: List/tuple of field names to include, a projection
                document passed through as-is, or None for no projection

    Returns:
        Projection document, or None

    Example:
        build_projection(["id", "name"])  # {"id": 1, "name": 1}
        build_projection({"_id": 0})      # {"_id": 0}
    """
    if fields is None:
        return None
    if isinstance(fields, Mapping):
        return dict(fields)
    if isinstance(fields, (list, tuple)):
        return {field: PROJECTION_INCLUDE for field in fields}
    raise TypeError(
        f"fields must be a list of field names or a projection document, "
        f"got {type(fields).__name__}"
    )


def build_update(value: Mapping[str, Any], replace: Any = False, multi: Any = False) -> Any:
    """
    Build the update argument for update_one/update_many/replace_one.

    Args:
        value: Fields to merge, or the full replacement document
        replace: Literal True to replace the document body
        multi: Literal True when the update targets every match

    Returns:
        ``{"$set": value}`` for a merge update, ``value`` for a single
        replacement, or an update pipeline for a multi-document replacement
    """
    if not is_strict_true(replace):
        return {SET_OPERATOR: value}
    if not is_strict_true(multi):
        return value
    # update_many rejects plain documents; swap each body but keep its _id
    return [
        {
            "$replaceWith": {
                "$mergeObjects": [{"$literal": value}, {"_id": "$_id"}],
            }
        }
    ]


def build_index_models(index_specs: Sequence[Any]) -> list[IndexModel]:
    """
    Convert index definitions into IndexModel instances.

    Each entry may be an IndexModel, a key document (``{"email": 1}``),
    a list of ``(field, direction)`` pairs, or a mapping with a ``key``
    entry plus index options (``{"key": {"email": 1}, "unique": True}``).
    """
    models: list[IndexModel] = []
    for spec in index_specs:
        if isinstance(spec, IndexModel):
            models.append(spec)
        elif isinstance(spec, Mapping) and "key" in spec:
            options = {k: v for k, v in spec.items() if k != "key"}
            models.append(IndexModel(normalize_keys(spec["key"]), **options))
        elif isinstance(spec, (Mapping, list)):
            models.append(IndexModel(normalize_keys(spec)))
        else:
            raise TypeError(f"Unsupported index definition: {spec!r}")
    return models


def normalize_keys(keys: Mapping[str, Any] | list[tuple[str, Any]]) -> list[tuple[str, Any]]:
    """
    Normalize index keys to a list of (field_name, direction) tuples.
    """
    if isinstance(keys, Mapping):
        return list(keys.items())
    return [tuple(pair) for pair in keys]


def build_aggregate_options(
    allow_disk_use: bool, options: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Merge caller aggregate options over the disk-use default."""
    merged: dict[str, Any] = {"allowDiskUse": allow_disk_use}
    if options:
        merged.update(options)
    return merged
