"""Functional core - pure business logic with no I/O."""

from .achievements import (
    Achievement,
    CorruptCollection,
    ValidationError,
    decode_collection,
    encode_collection,
    format_date,
    format_timestamp,
    group_by_date,
    new_id,
    parse_date,
    validate_task,
)

__all__ = [
    "Achievement",
    "CorruptCollection",
    "ValidationError",
    "decode_collection",
    "encode_collection",
    "format_date",
    "format_timestamp",
    "group_by_date",
    "new_id",
    "parse_date",
    "validate_task",
]
