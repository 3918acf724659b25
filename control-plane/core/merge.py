# control-plane/core/merge.py
"""
Merge/Override Validator
Applies a user-supplied partial spec over the computed routing spec
"""

import copy
from typing import Any, Dict, TypeVar

from pydantic import ValidationError

from schemas.routing import RoutingObjectSpec
from .errors import MergeError

SpecT = TypeVar("SpecT", bound=RoutingObjectSpec)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursive merge, override wins
    Mappings merge key by key; lists and scalars are replaced whole
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in error['loc']) or '<root>'}: {error['msg']}"
        for error in exc.errors()
    )


def merge_override(base: SpecT, override: Any) -> SpecT:
    """
    Merge `override` into `base` and validate against base's schema

    Args:
        base: Computed routing spec
        override: Raw override fragment (camelCase keys), may be empty

    Returns:
        base itself for an empty override, a new spec otherwise

    Raises:
        MergeError: If the fragment is not a mapping or the merged
            document does not fit the schema
    """
    if not override:
        return base

    if not isinstance(override, dict):
        raise MergeError(f"Override must be a mapping, got {type(override).__name__}")

    merged = deep_merge(base.to_document(), override)
    try:
        return type(base).model_validate(merged)
    except ValidationError as e:
        raise MergeError(f"Invalid override for {type(base).__name__}: {_describe(e)}") from e
