"""Snapshot codec for dormant caches.

A snapshot is compact JSON: one ``[ownerX, ownerY, serial]`` triple per coin,
in stack order. Decoding is all-or-nothing and re-resolves every owner cell
through the registry, so coins coming back from storage share cell instances
with everything else in the process.

Example:
    text = serialize(cache)          # '[[3,4,0],[3,4,1]]'
    again = deserialize(cache.cell, text, registry)
    assert again.coins == cache.coins
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from geocoin.board.base import Coin
from geocoin.caches.base import Cache
from geocoin.exceptions import MalformedSnapshotError

if TYPE_CHECKING:
    from geocoin.board.base import Cell
    from geocoin.board.registry import CellRegistry

_COIN_FIELDS = 3


def _is_int(value: Any) -> bool:  # noqa: ANN401
    # bool is an int subclass but never a valid index or serial
    return isinstance(value, int) and not isinstance(value, bool)


def coin_to_data(coin: Coin) -> list[int]:
    """Encode a coin as a JSON-ready ``[ownerX, ownerY, serial]`` triple."""
    return [coin.cell.xindex, coin.cell.yindex, coin.serial]


def parse_coin_data(data: Any) -> tuple[int, int, int]:  # noqa: ANN401
    """Validate a decoded coin triple and return it as a tuple.

    Raises:
        ValueError: If ``data`` is not a triple of integers with a non-negative serial.
    """
    if not isinstance(data, list) or len(data) != _COIN_FIELDS or not all(_is_int(v) for v in data):
        msg = f"Expected [ownerX, ownerY, serial], got {data!r}"
        raise ValueError(msg)
    xindex, yindex, serial = data
    if serial < 0:
        msg = f"Negative coin serial: {serial}"
        raise ValueError(msg)
    return xindex, yindex, serial


def coin_from_data(data: Any, registry: CellRegistry) -> Coin:  # noqa: ANN401
    """Decode a coin triple, canonicalizing its owner cell.

    Raises:
        ValueError: If the triple is malformed.
    """
    xindex, yindex, serial = parse_coin_data(data)
    return Coin(registry.canonical_cell(xindex, yindex), serial)


def serialize(cache: Cache) -> str:
    """Encode a cache's coin list as snapshot text."""
    return json.dumps([coin_to_data(coin) for coin in cache.coins], separators=(",", ":"))


def deserialize(cell: Cell, snapshot: str, registry: CellRegistry) -> Cache:
    """Rebuild an Active cache from snapshot text.

    Args:
        cell: Canonical cell the snapshot belongs to.
        snapshot: Text previously produced by serialize().
        registry: Registry used to canonicalize coin owners.

    Returns:
        A fully populated cache.

    Raises:
        MalformedSnapshotError: If the text is not valid JSON or any coin is malformed.
    """
    try:
        data = json.loads(snapshot)
    except (TypeError, ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and over-long integer literals
        msg = f"Snapshot for {cell.key} is not valid JSON: {e}"
        raise MalformedSnapshotError(msg) from e

    if not isinstance(data, list):
        msg = f"Snapshot for {cell.key} must be a list, got {type(data).__name__}"
        raise MalformedSnapshotError(msg)

    try:
        coins = [coin_from_data(item, registry) for item in data]
    except ValueError as e:
        msg = f"Snapshot for {cell.key} has a malformed coin: {e}"
        raise MalformedSnapshotError(msg) from e

    return Cache(cell=cell, coins=coins)
