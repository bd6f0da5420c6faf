"""Date window calculation."""

from datetime import date

from birthday_board.domain.errors import InvalidRequestError
from birthday_board.domain.render import DateWindow


def reference_date(day: int | None, month: int | None, today: date) -> date:
    """Return the window start for an optional day/month.

    The year always comes from ``today``; a day/month near New Year is not
    shifted into the adjacent year.
    """
    if day is None or month is None:
        return today
    try:
        return date(today.year, month, day)
    except ValueError as exc:
        raise InvalidRequestError(
            f"Invalid day/month combination: day={day}, month={month}"
        ) from exc


def build_window(day: int | None, month: int | None, today: date) -> DateWindow:
    """Return the 7-day window starting at the reference date."""
    return DateWindow(start=reference_date(day, month, today))
