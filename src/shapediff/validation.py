"""
JSON representability checks for values placed into a JSON Patch.

Only plain JSON survives: None, bool, int, str, finite float, lists
(tuples are emitted as lists) and dicts with string keys. Self-referential
containers are rejected.
"""

import math
from typing import Any, Optional

from .config import ExcessKeyPolicy
from .errors import NonJsonValueError
from .pointer import encode_pointer


def validate_json_value(
    value: Any,
    path: list[str],
    allow_nan: bool = False,
    excess_key_policy: ExcessKeyPolicy = ExcessKeyPolicy.ERROR,
    _active: Optional[set[int]] = None
) -> Any:
    """
    Validate a value and return its JSON form.

    Args:
        value: The value to place into the patch
        path: Segments addressing the value (for error reporting)
        allow_nan: Accept NaN and infinities
        excess_key_policy: Reject or drop non-string dict keys

    Returns:
        The value itself for scalars; a fresh list/dict for containers

    Raises:
        NonJsonValueError: If the value (or anything inside it) is not JSON
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        if not allow_nan and not math.isfinite(value):
            raise NonJsonValueError(
                encode_pointer(path),
                f"Non-finite number {value!r} is not JSON"
            )
        return value

    if not isinstance(value, (list, tuple, dict)):
        raise NonJsonValueError(
            encode_pointer(path),
            f"Value of type {type(value).__name__} is not JSON"
        )

    # Containers on the current path, to reject cycles
    if _active is None:
        _active = set()
    if id(value) in _active:
        raise NonJsonValueError(
            encode_pointer(path),
            "Value is cyclic and has no JSON representation"
        )
    _active.add(id(value))

    try:
        if isinstance(value, dict):
            result = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    if excess_key_policy == ExcessKeyPolicy.DROP:
                        continue
                    raise NonJsonValueError(
                        encode_pointer(path),
                        f"Unexpected non-string key {key!r}"
                    )
                result[key] = validate_json_value(
                    item, path + [key], allow_nan, excess_key_policy, _active
                )
            return result

        return [
            validate_json_value(item, path + [str(i)], allow_nan, excess_key_policy, _active)
            for i, item in enumerate(value)
        ]
    finally:
        _active.discard(id(value))
