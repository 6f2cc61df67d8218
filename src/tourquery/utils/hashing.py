"""Hashing and normalization utilities for query key generation."""

import dataclasses
import hashlib
import json
from collections.abc import Mapping, Set
from typing import Any

from tourquery.errors import KeyBuildError

MAPPING = "map"
SEQUENCE = "seq"
SET = "set"
BOOL = "bool"


def normalize_params(value: Any) -> Any:
    """Convert a parameter structure into a canonical, hashable form.

    Every container is tagged with its kind so that structurally different
    parameters never share a key:

    * mappings become ``("map", pairs)`` with pairs sorted by name and
      ``None`` values dropped; dataclass instances are treated as mappings
    * lists and tuples become ``("seq", items)``
    * sets become ``("set", items)`` in canonical order
    * booleans become ``("bool", value)`` so ``True`` and ``1`` differ
    * integral floats become ints, since ``1.0 == 1``

    Args:
        value: The parameter structure to normalize.

    Returns:
        A nested tuple structure that compares equal for equal inputs.

    Raises:
        KeyBuildError: If the structure contains values that cannot be
            represented deterministically.
    """
    if value is None or isinstance(value, (str, int)) and not isinstance(value, bool):
        return value

    if isinstance(value, bool):
        return (BOOL, value)

    if isinstance(value, float):
        return int(value) if value.is_integer() else value

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}

    if isinstance(value, Mapping):
        pairs = []
        for name, item in value.items():
            if not isinstance(name, str):
                raise KeyBuildError(
                    f"Parameter names must be strings, got {type(name).__name__}"
                )
            if item is None:
                continue
            pairs.append((name, normalize_params(item)))
        return (MAPPING, tuple(sorted(pairs, key=lambda pair: pair[0])))

    if isinstance(value, (list, tuple)):
        return (SEQUENCE, tuple(normalize_params(item) for item in value))

    if isinstance(value, Set):
        items = [normalize_params(item) for item in value]
        return (SET, tuple(sorted(items, key=_canonical_json)))

    raise KeyBuildError(
        f"Cannot build a query key from value of type {type(value).__name__}"
    )


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a normalized value.

    Args:
        value: A value produced by :func:`normalize_params`.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    if value is None or value == ():
        return "none"

    return hashlib.sha256(_canonical_json(value).encode()).hexdigest()[:16]


def _canonical_json(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"))
