"""
Wire date handling.

The backend sends dates as ``2025-11-24T01:47:22.895Z`` (fixed format with
milliseconds and a zone) on most endpoints, but some return plain ISO-8601
(``2025-11-24T01:47:22Z``, ``2025-11-24``). Parsing tries the fixed format
first and ISO-8601 second.
"""
from datetime import datetime, timezone
from typing import Annotated, Any, Callable, Tuple

from pydantic import BeforeValidator, PlainSerializer

FIXED_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"


def parse_fixed(text: str) -> datetime:
	"""Parse ``yyyy-MM-dd'T'HH:mm:ss.SSSZ`` (zone as ``Z`` or ``+0000``)."""
	return datetime.strptime(text, FIXED_FORMAT)


def parse_iso(text: str) -> datetime:
	"""Parse ISO-8601. Naive values are taken as UTC."""
	if text.endswith("Z"):
		text = text[:-1] + "+00:00"
	value = datetime.fromisoformat(text)
	if value.tzinfo is None:
		value = value.replace(tzinfo=timezone.utc)
	return value


DATE_STRATEGIES: Tuple[Callable[[str], datetime], ...] = (parse_fixed, parse_iso)


def parse_wire_date(value: Any) -> datetime:
	"""Decode a wire date, trying each strategy in order.

	Raises:
		ValueError: if the value is not a string or matches no strategy
	"""
	if isinstance(value, datetime):
		return value
	if not isinstance(value, str):
		raise ValueError(f"expected a date string, got {type(value).__name__}")
	text = value.strip()
	for strategy in DATE_STRATEGIES:
		try:
			return strategy(text)
		except ValueError:
			continue
	raise ValueError(f"unrecognised date format: {value!r}")


def format_wire_date(value: datetime) -> str:
	"""Encode a datetime the way the backend expects to receive it."""
	if value.tzinfo is None:
		value = value.replace(tzinfo=timezone.utc)
	value = value.astimezone(timezone.utc)
	return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}+0000"


WireDate = Annotated[
	datetime,
	BeforeValidator(parse_wire_date),
	PlainSerializer(format_wire_date, return_type=str, when_used="json"),
]
