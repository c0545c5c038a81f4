# src/fritter/utils/enums.py
"""Helpers for turning client-supplied strings into domain enums."""

from __future__ import annotations

from enum import StrEnum
from typing import TypeVar

from fritter.core.errors import InvalidArgumentError

E = TypeVar("E", bound=StrEnum)


def parse_enum(enum_cls: type[E], value: str | E, label: str) -> E:
    """Return ``value`` as a member of ``enum_cls``.

    Args:
        enum_cls: Target enumeration.
        value: Raw string (or an existing member).
        label: Name used in the error message, e.g. ``"vote kind"``.

    Raises:
        InvalidArgumentError: If ``value`` names no member of ``enum_cls``.
    """
    try:
        return enum_cls(value)
    except ValueError as err:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidArgumentError(
            f"Unknown {label} {value!r}; expected one of: {allowed}"
        ) from err
