from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any

from ..models.row_data import NestedRecord

"""Downstream payload split for user records.

A sink that stores users needs three things from a nested record: the
mandatory name/age fields, the ``address`` subtree as its own payload, and
every other top-level property as "additional info". This module does that
split; it does not store anything.
"""

__all__ = [
    "UserPayload",
    "split_user_payload",
]

NAME_KEY = "name"
AGE_KEY = "age"
ADDRESS_KEY = "address"
_RESERVED = (NAME_KEY, AGE_KEY, ADDRESS_KEY)
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class UserPayload:
    name: str  # "firstName lastName", trimmed
    age: int
    address: Any | None = None
    additional_info: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _as_text(value: Any) -> str:
    if value is None or value == "":
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_age(value: Any) -> int:
    """Integer age; 0 when the value has no leading integer."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else 0


def split_user_payload(record: NestedRecord | dict[str, Any]) -> UserPayload:
    data = record.data if isinstance(record, NestedRecord) else record

    name = data.get(NAME_KEY)
    if isinstance(name, dict):
        first = _as_text(name.get("firstName"))
        last = _as_text(name.get("lastName"))
    else:
        first = last = ""
    full_name = f"{first} {last}".strip()

    additional = {k: v for k, v in data.items() if k not in _RESERVED}
    return UserPayload(
        name=full_name,
        age=_as_age(data.get(AGE_KEY)),
        address=data.get(ADDRESS_KEY),
        additional_info=additional or None,
    )
