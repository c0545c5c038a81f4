# src/fritter/db/types.py
"""Column type helpers shared by the ORM models."""

from enum import StrEnum

from sqlalchemy import Enum


def enum_column_type(enum_cls: type[StrEnum]) -> Enum:
    """Return a portable column type that stores enum *values*, not names.

    Values are kept as VARCHAR with a CHECK constraint so the schema is the
    same on SQLite and Postgres.
    """
    return Enum(
        enum_cls,
        native_enum=False,
        create_constraint=True,
        length=32,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
