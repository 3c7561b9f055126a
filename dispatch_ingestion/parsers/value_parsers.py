"""
Value Parsers
=============

Pure cell-level parsers shared by both upload modes.

Example inputs:
- "15.01.2025" → 2025-01-15 (day.month.year)
- "01/15/2025" → 2025-01-15 (month-first fallback)
- "₹1,200" → Decimal("1200")
- "100+50" → Decimal("150")
- "100-50-20" → Decimal("30")

None of these functions raise on malformed input: dates fall back to the
current time and amounts fall back to zero.
"""

import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Final, Optional, Sequence

from pydantic.dataclasses import dataclass


# =============================================================================
# Patterns
# =============================================================================

# Stripped from amounts before arithmetic
_AMOUNT_NOISE: Final = re.compile(r"[₹$€£,\s]")

# Longest numeric prefix, the way spreadsheet tools read "12.5kg" as 12.5
_LEADING_NUMBER: Final = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INT: Final = re.compile(r"^[+-]?\d+")

# Year-first dates with 1- or 2-digit month/day ("2025-1-5", "2025/01/05")
_YEAR_FIRST: Final = re.compile(r"^(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})$")

# Month-name layouts produced by spreadsheet exports
_TEXTUAL_DATE_FORMATS: Final[tuple[str, ...]] = (
    "%d %b %Y",
    "%d %B %Y",
    "%d-%b-%Y",
    "%d-%B-%Y",
    "%b %d %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)


# =============================================================================
# Date Parsing
# =============================================================================


@dataclass(frozen=True)
class DateParseResult:
    """
    Result of date parsing.

    Attributes:
        value: Parsed date, or the current time when nothing matched
        was_parsed: Whether a parsing rule matched the input text
    """

    value: datetime
    was_parsed: bool


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _leading_int(text: str) -> Optional[int]:
    match = _LEADING_INT.match(text.strip())
    if not match:
        return None
    try:
        return int(match.group())
    except ValueError:
        # digit runs beyond the interpreter's int conversion limit
        return None


def _build_date(year: Optional[int], month: Optional[int], day: Optional[int]) -> Optional[datetime]:
    """Construct a UTC date, or None when the parts are not a real calendar date."""
    if year is None or month is None or day is None:
        return None
    if 0 <= year < 100:
        year += 2000
    try:
        return datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError:
        return None


def _roll_date(year: Optional[int], month: Optional[int], day: Optional[int]) -> Optional[datetime]:
    """Construct a UTC date, carrying overflowing months and days forward.

    Day-first and month-first layouts accept any day up to 31, so "31.02.2025"
    becomes 2025-03-03 and day 0 is the last day of the previous month.
    """
    if year is None or month is None or day is None:
        return None
    if 0 <= year < 100:
        year += 2000
    carried_year, month_offset = divmod(year * 12 + month - 1, 12)
    try:
        first_of_month = datetime(carried_year, month_offset + 1, 1, tzinfo=timezone.utc)
        return first_of_month + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def _parse_native(value: str) -> Optional[datetime]:
    """ISO 8601 and month-name forms."""
    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        match = _YEAR_FIRST.match(value)
        if match:
            year, month, day = (int(g) for g in match.groups())
            return _build_date(year, month, day)
        for fmt in _TEXTUAL_DATE_FORMATS:
            try:
                parsed = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue

    if parsed is not None and parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_day_first_or_month_first(parts: Sequence[str]) -> Optional[datetime]:
    """Try D/M/Y first, then the US M/D/Y layout."""
    first, second, year = (_leading_int(p) for p in parts)
    if first is None or second is None:
        return None

    if first <= 31 and second <= 12:
        date = _roll_date(year, second, first)
        if date is not None:
            return date

    if first <= 12 and second <= 31:
        return _roll_date(year, first, second)

    return None


def parse_date_detailed(value: Optional[str]) -> DateParseResult:
    """
    Parse a date cell using the multi-format policy.

    Rules are tried in order and the first one producing a date wins: ISO /
    month-name text (calendar-exact), ``D.M.Y``, ``D/M/Y`` then ``M/D/Y``,
    ``D-M-Y`` then ``M-D-Y``. The day and month rules carry overflow into the
    following month, so ``31/02/2025`` is 2025-03-03. Blank input and input
    matching no rule resolve to the current time.

    Args:
        value: Raw cell text (may be empty or None)

    Returns:
        DateParseResult with a timezone-aware date and whether a rule matched
    """
    if value is None or not str(value).strip():
        return DateParseResult(value=_now(), was_parsed=False)

    text = str(value).strip()

    parsed = _parse_native(text)
    if parsed is not None:
        return DateParseResult(value=parsed, was_parsed=True)

    if "." in text:
        parts = text.split(".")
        if len(parts) == 3:
            day, month, year = (_leading_int(p) for p in parts)
            parsed = _roll_date(year, month, day)
            if parsed is not None:
                return DateParseResult(value=parsed, was_parsed=True)

    for separator in ("/", "-"):
        if separator in text:
            parts = text.split(separator)
            if len(parts) == 3:
                parsed = _parse_day_first_or_month_first(parts)
                if parsed is not None:
                    return DateParseResult(value=parsed, was_parsed=True)

    return DateParseResult(value=_now(), was_parsed=False)


def parse_date(value: Optional[str]) -> datetime:
    """Parse a date cell; never raises and never returns an invalid instant."""
    return parse_date_detailed(value).value


# =============================================================================
# Numeric Parsing
# =============================================================================


def _leading_decimal(text: str) -> Optional[Decimal]:
    match = _LEADING_NUMBER.match(text.strip())
    if not match:
        return None
    try:
        return Decimal(match.group())
    except InvalidOperation:
        return None


def parse_amount(value: Optional[str]) -> Decimal:
    """
    Parse an amount cell, evaluating inline ``+`` and ``-`` expressions.

    Currency symbols, thousands separators and whitespace are removed first.
    ``"100+50"`` sums every part; a ``-`` after the first character makes
    ``"100-50-20"`` subtract left to right. Tokens that are not numbers count
    as zero.

    Args:
        value: Raw cell text

    Returns:
        Decimal amount (Decimal("0") for empty or unparseable input)
    """
    if not value:
        return Decimal("0")

    cleaned = _AMOUNT_NOISE.sub("", str(value))

    if "+" in cleaned:
        total = Decimal("0")
        for part in cleaned.split("+"):
            total += _leading_decimal(part) or Decimal("0")
        return total

    if cleaned.find("-") > 0:
        parts = cleaned.split("-")
        total = _leading_decimal(parts[0]) or Decimal("0")
        for part in parts[1:]:
            total -= _leading_decimal(part) or Decimal("0")
        return total

    return _leading_decimal(cleaned) or Decimal("0")


def parse_quantity(value: Optional[str]) -> int:
    """Leading integer of a quantity cell ("12 pcs" → 12), else 0."""
    if not value:
        return 0
    parsed = _leading_int(_AMOUNT_NOISE.sub("", str(value)))
    return parsed if parsed is not None else 0


# =============================================================================
# Cell Access
# =============================================================================


def extract_text(row: Sequence[Any], column_index: int) -> str:
    """
    Trimmed text of a cell.

    Args:
        row: Sequence of raw cells
        column_index: Zero-based position, or -1 for an unmapped column

    Returns:
        Cell text, or "" when the column is unmapped, out of range, or null
    """
    if column_index < 0 or column_index >= len(row):
        return ""
    cell = row[column_index]
    if cell is None:
        return ""
    return str(cell).strip()
