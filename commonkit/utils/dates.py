"""Human readable date formatting helpers."""

from __future__ import annotations

from datetime import date, datetime

__all__ = [
    "DateFormatter",
    "format_date",
    "is_current_month",
    "month_name_to_number",
    "ordinal_suffix",
]


def ordinal_suffix(day: int) -> str:
    if day % 100 in (11, 12, 13):
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


class DateFormatter:
    """Fluent builder for ``"25th February 2025"`` style strings.

    Each ``with_*`` call flips one flag and returns the formatter so calls chain:
    ``format_date(d).with_short_day_name().with_short_month_name().with_short_year()``
    renders ``"Tue 25th Feb 25"``.
    """

    def __init__(self, value: date) -> None:
        self._date = value
        self._short_day_name = False
        self._full_day_name = False
        self._short_month_name = False
        self._short_year = False
        self._ordinal_suffix = True

    def with_short_day_name(self) -> DateFormatter:
        self._short_day_name = True
        return self

    def with_full_day_name(self) -> DateFormatter:
        self._full_day_name = True
        return self

    def with_short_month_name(self) -> DateFormatter:
        self._short_month_name = True
        return self

    def with_short_year(self) -> DateFormatter:
        self._short_year = True
        return self

    def without_ordinal_suffix(self) -> DateFormatter:
        self._ordinal_suffix = False
        return self

    def __str__(self) -> str:
        d = self._date
        parts: list[str] = []
        # short wins when both day name flags are set
        if self._short_day_name:
            parts.append(d.strftime("%a"))
        elif self._full_day_name:
            parts.append(d.strftime("%A"))

        day = str(d.day)
        if self._ordinal_suffix:
            day += ordinal_suffix(d.day)
        parts.append(day)
        parts.append(d.strftime("%b" if self._short_month_name else "%B"))
        parts.append(d.strftime("%y" if self._short_year else "%Y"))
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"DateFormatter({self._date!r}) -> {str(self)!r}"


def format_date(value: date) -> DateFormatter:
    return DateFormatter(value)


_MONTHS = {
    name: number
    for number, name in enumerate(
        [
            "january",
            "february",
            "march",
            "april",
            "may",
            "june",
            "july",
            "august",
            "september",
            "october",
            "november",
            "december",
        ],
        start=1,
    )
}


def month_name_to_number(name: str | None) -> int:
    """Full English month name to its number ("January" -> 1), 0 when unknown."""
    if not name or not name.strip():
        return 0
    return _MONTHS.get(name.strip().lower(), 0)


def is_current_month(name: str | None, *, today: date | None = None) -> bool:
    today = today or datetime.now().date()
    return month_name_to_number(name) == today.month
