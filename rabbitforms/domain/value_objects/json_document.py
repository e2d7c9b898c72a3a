"""Opaque JSON documents (theme, schema, settings, conditional_logic, data, metadata).

The store never interprets these beyond their shape: a recursive union of
string, number, boolean, null, ordered list and ordered string-keyed mapping.
Validation rejects anything JSON cannot carry so round-trips are lossless.
"""

import copy
import math
from typing import Any

from typing_extensions import TypeAliasType

from rabbitforms.domain.exceptions import ValidationException

JsonValue = TypeAliasType(
    "JsonValue",
    "str | int | float | bool | None | list[JsonValue] | dict[str, JsonValue]",
)

# Maximum nesting accepted for a stored document.
MAX_DOCUMENT_DEPTH = 64


def _check(value: Any, path: str, depth: int, field: str) -> None:
    if depth > MAX_DOCUMENT_DEPTH:
        raise ValidationException(
            f"{field} exceeds maximum nesting depth of {MAX_DOCUMENT_DEPTH} at {path}",
            field=field,
        )
    if value is None or isinstance(value, (str, bool, int)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationException(
                f"{field} contains a non-finite number at {path}", field=field
            )
        return
    if isinstance(value, list):
        for index, item in enumerate(value):
            _check(item, f"{path}[{index}]", depth + 1, field)
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise ValidationException(
                    f"{field} has a non-string key {key!r} at {path}", field=field
                )
            _check(item, f"{path}.{key}", depth + 1, field)
        return
    raise ValidationException(
        f"{field} contains unsupported type {type(value).__name__} at {path}",
        field=field,
    )


def validate_json_document(value: Any, field: str = "document") -> JsonValue:
    """Validate that value is a JSON document and return an independent deep copy.

    Args:
        value: Candidate document.
        field: Field name used in error messages and details.

    Returns:
        A deep copy, so later mutation by the caller cannot alter stored state.

    Raises:
        ValidationException: If any node is not a JSON type.
    """
    _check(value, "$", 0, field)
    return copy.deepcopy(value)


def document_or_empty(value: Any, field: str) -> JsonValue:
    """Validate value, substituting an empty mapping for None (column defaults)."""
    if value is None:
        return {}
    return validate_json_document(value, field)
