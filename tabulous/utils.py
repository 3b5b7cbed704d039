from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, TypeVar

from pydantic import BaseModel


T = TypeVar("T", BaseModel, dict)


class NotFoundError(LookupError):
    """A mesh, anchor or stack could not be resolved."""


def _field_name(model: BaseModel, key: str) -> str:
    fields = type(model).model_fields
    if key in fields:
        return key
    for name, info in fields.items():
        if info.alias == key:
            return name
    return key


def _merged(current: Any, value: Any) -> Any:
    if isinstance(value, BaseModel):
        value = value.model_dump(exclude_unset=True)
    if isinstance(current, (BaseModel, dict)) and isinstance(value, Mapping):
        return merge_props(current, value)
    if isinstance(current, list) and isinstance(value, list):
        return [*current, *deepcopy(value)]
    return deepcopy(value)


def merge_props(target: T, props: Mapping[str, Any]) -> T:
    """Deeply merge `props` into `target`, in place.

    - nested models and dicts are merged recursively;
    - lists are concatenated, never replaced;
    - everything else is overwritten with a copy of the new value.

    Keys may be python field names or their camelCase aliases.
    """

    for key, value in props.items():
        if isinstance(target, BaseModel):
            name = _field_name(target, key)
            current = getattr(target, name, None)
            merged = _merged(current, value)
            if merged is not current:
                setattr(target, name, merged)
        else:
            merged = _merged(target.get(key), value)
            if merged is not target.get(key):
                target[key] = merged
    return target

