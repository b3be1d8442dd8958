"""
Field-coercion helpers for raw upstream payloads.

Upstream JSON is loosely typed: numbers arrive as strings, booleans as
"0"/"1"/"true", and the same field shows up under different names depending
on the endpoint. These helpers never raise; they return None (or an empty
value) for anything they cannot interpret.
"""

import json
import math
from typing import Any, Callable, Iterable, Mapping, TypeVar

T = TypeVar("T")

_TRUE_STRINGS = frozenset({"1", "true", "yes"})


def is_mapping(value: Any) -> bool:
    """True for dict-like values (not lists, not None)."""
    return isinstance(value, Mapping)


def safe_string(value: Any) -> str:
    """
    Coerce a scalar to str.

    Strings are returned as-is, numbers are formatted, everything else
    (None, lists, dicts, booleans) becomes "".
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)) and math.isfinite(value):
        return str(value)
    return ""


def optional_string(value: Any) -> str | None:
    """Like safe_string, but None instead of "" so the field is omitted."""
    return safe_string(value) or None


def to_number(value: Any) -> int | float | None:
    """
    Coerce a numeric or numeric-string value.

    Returns an int when the value is integral, a float otherwise, and None
    for missing, non-numeric, NaN or infinite values.

    Example:
        to_number("2019")   # 2019
        to_number("3.5")    # 3.5
        to_number("")       # None
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def parse_boolean(value: Any) -> bool:
    """True for True, non-zero numbers and "1"/"true"/"yes" (any case)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def extract_field(raw: Any, *keys: str) -> Any:
    """
    Try an ordered list of candidate keys and return the first usable value.

    A value is usable when it is neither None nor "". Non-mapping input
    yields None.

    Example:
        extract_field({"title": "", "name": "Arijit"}, "title", "name")  # "Arijit"
    """
    if not is_mapping(raw):
        return None
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def safe_list_map(items: Any, parser: Callable[[Any], T]) -> tuple[T, ...]:
    """
    Map parser over the mapping entries of a list.

    Non-list input yields (). Entries that are not mappings are skipped.
    """
    if not isinstance(items, (list, tuple)):
        return ()
    return tuple(parser(item) for item in items if is_mapping(item))


def normalize_list(value: Any, key: str) -> list[Any]:
    """
    Return the items of a collection that may be a list or a wrapper dict.

    Example:
        normalize_list([{...}], "songs")             # [{...}]
        normalize_list({"songs": [{...}]}, "songs")  # [{...}]
        normalize_list(None, "songs")                # []
    """
    if isinstance(value, list):
        return value
    if is_mapping(value) and isinstance(value.get(key), list):
        return value[key]
    return []


def safe_json_loads(value: str, fallback: Any = None) -> Any:
    """Parse JSON text, returning fallback when it is not valid JSON."""
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return fallback


def remove_none(params: Mapping[str, Any]) -> dict[str, str]:
    """Drop None values and stringify the rest, for use as query params."""
    return {key: str(value) for key, value in params.items() if value is not None}


def non_empty(values: Iterable[T]) -> tuple[T, ...] | None:
    """Tuple of values, or None when there are none."""
    result = tuple(values)
    return result or None
