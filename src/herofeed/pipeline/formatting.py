"""Presentation formatters for event payload values."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, tzinfo
from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from herofeed.errors import MalformedEventError

MIST_PER_SUI = Decimal(1_000_000_000)
PRICE_QUANTUM = Decimal("0.01")
MAX_TIMESTAMP_DIGITS = 20
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def resolve_timezone(name: str | None) -> tzinfo:
    """Resolve an IANA zone name, treating blank and "UTC" as UTC."""
    if name is None or not name.strip() or name.strip().upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone '{name}'") from exc


def parse_decimal(value: Any, field_name: str = "value") -> Decimal:
    """Parse a decimal-string or numeric payload value."""
    if value is None or isinstance(value, bool):
        raise MalformedEventError(f"{field_name} is missing")
    text = str(value).strip()
    try:
        parsed = Decimal(text)
    except InvalidOperation as exc:
        raise MalformedEventError(f"{field_name} is not numeric: {text!r}") from exc
    if not parsed.is_finite():
        raise MalformedEventError(f"{field_name} is not finite: {text!r}")
    return parsed


def parse_timestamp_ms(value: Any, field_name: str = "timestamp") -> int:
    """Parse epoch milliseconds, rejecting values wider than MAX_TIMESTAMP_DIGITS."""
    parsed = parse_decimal(value, field_name=field_name)
    if parsed.adjusted() >= MAX_TIMESTAMP_DIGITS:
        raise MalformedEventError(f"{field_name} out of range: {str(value).strip()[:32]!r}")
    return int(parsed)


def format_timestamp(timestamp_ms: Any, tz: tzinfo = UTC) -> str:
    """Render epoch milliseconds as an en-US style local date-time.

    `format_timestamp("0")` gives `"1/1/1970, 12:00:00 AM"` in UTC.
    """
    millis = parse_timestamp_ms(timestamp_ms)
    try:
        moment = (_EPOCH + timedelta(milliseconds=millis)).astimezone(tz)
    except OverflowError as exc:
        raise MalformedEventError(f"timestamp out of range: {millis}") from exc
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


def format_address(address: str) -> str:
    """Shorten an address to its first 6 and last 4 characters.

    Values shorter than 10 characters are returned unchanged.
    """
    if len(address) < 10:
        return address
    return f"{address[:6]}...{address[-4:]}"


def format_price(amount: Any) -> str:
    """Convert a MIST amount to SUI with two decimals."""
    parsed = parse_decimal(amount, field_name="amount")
    try:
        value = (parsed / MIST_PER_SUI).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    except DecimalException as exc:
        raise MalformedEventError(f"amount out of range: {str(amount).strip()[:32]!r}") from exc
    return format(value, "f")


def format_identifier(value: str, length: int = 8) -> str:
    return f"{value[:length]}..."


def format_tail(value: str, length: int = 8) -> str:
    return f"...{value[-length:]}"
