"""Pure achievement domain logic - no I/O dependencies."""

import json
import secrets
from dataclasses import dataclass
from datetime import date, datetime, timezone


FIELDS = ("id", "date", "task", "metric", "impact", "createdAt")


class ValidationError(ValueError):
    """Raised when a record would be persisted with invalid fields."""

    pass


class CorruptCollection(ValueError):
    """Raised when stored bytes do not decode to a collection of records."""

    pass


@dataclass
class Achievement:
    """One journal entry."""

    id: str
    date: str  # YYYY-MM-DD
    task: str
    metric: str = ""
    impact: str = ""
    created_at: str = ""

    def to_dict(self) -> dict:
        """Serialize to the persisted record shape."""
        return {
            "id": self.id,
            "date": self.date,
            "task": self.task,
            "metric": self.metric,
            "impact": self.impact,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Achievement":
        """Create Achievement from a persisted record."""
        if not isinstance(data, dict):
            raise ValueError(f"Record must be an object, got {type(data).__name__}")

        values = {}
        for key in FIELDS:
            if key in ("metric", "impact"):
                value = data.get(key)
                if value is None:
                    value = ""
            elif key not in data:
                raise ValueError(f"Record missing field '{key}'")
            else:
                value = data[key]
            if not isinstance(value, str):
                raise ValueError(f"Field '{key}' must be a string")
            values[key] = value

        return cls(
            id=values["id"],
            date=values["date"],
            task=values["task"],
            metric=values["metric"],
            impact=values["impact"],
            created_at=values["createdAt"],
        )


def validate_task(task: str) -> str:
    """Return the trimmed task, refusing empty ones."""
    trimmed = (task or "").strip()
    if not trimmed:
        raise ValidationError("Task must not be empty")
    return trimmed


def parse_date(value: date | str) -> str:
    """Normalize a date or YYYY-MM-DD string to canonical form."""
    if isinstance(value, date):
        return format_date(value)
    try:
        return date.fromisoformat(value.strip()).isoformat()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def format_date(day: date) -> str:
    """Format as zero-padded YYYY-MM-DD."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_id(moment: datetime) -> str:
    """
    Generate a record id.

    Millisecond epoch plus a random suffix, so two ids minted in the same
    millisecond still differ.
    """
    millis = int(moment.timestamp() * 1000)
    return f"{millis}-{secrets.token_hex(4)}"


def encode_collection(achievements: list[Achievement]) -> bytes:
    """Encode the collection as a UTF-8 JSON array, order preserved."""
    return json.dumps(
        [a.to_dict() for a in achievements], ensure_ascii=False
    ).encode("utf-8")


def decode_collection(raw: bytes) -> list[Achievement]:
    """Decode a stored collection. Raises CorruptCollection on any bad shape."""
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorruptCollection(f"Stored collection is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CorruptCollection(
            f"Stored collection must be an array, got {type(data).__name__}"
        )

    try:
        return [Achievement.from_dict(item) for item in data]
    except ValueError as e:
        raise CorruptCollection(f"Stored collection has a bad record: {e}") from e


def group_by_date(achievements: list[Achievement]) -> list[tuple[str, list[Achievement]]]:
    """Group into (date, records) sections, newest date first."""
    sections: dict[str, list[Achievement]] = {}
    for achievement in achievements:
        sections.setdefault(achievement.date, []).append(achievement)
    return sorted(sections.items(), key=lambda item: item[0], reverse=True)
