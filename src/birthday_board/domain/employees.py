"""Domain models for the employee roster."""

import re
from dataclasses import dataclass

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class EmployeeRecord:
    """One roster row.

    Birth day and month are None when the source value was not numeric, so
    the record can never fall inside a date window.
    """

    first_name: str
    last_name: str
    birth_day: int | None
    birth_month: int | None
    photo_name: str = ""

    @classmethod
    def from_row(cls, row: dict[str, str | None]) -> "EmployeeRecord":
        """Build a record from a CSV row keyed by the roster headers."""
        return cls(
            first_name=row.get("FirstName") or "",
            last_name=row.get("LastName") or "",
            birth_day=parse_lenient_int(row.get("Day")),
            birth_month=parse_lenient_int(row.get("Month")),
            photo_name=row.get("PhotoName") or "",
        )

    @property
    def full_name(self) -> str:
        """First and last name, trimmed and joined by a single space."""
        parts = (self.first_name.strip(), self.last_name.strip())
        return " ".join(part for part in parts if part)


@dataclass(frozen=True)
class Celebrant:
    """An employee whose birthday falls inside the current window."""

    index: int
    employee: EmployeeRecord

    @property
    def day_label(self) -> str:
        """Zero-padded day of month shown on the day bubble."""
        return f"{self.employee.birth_day:02d}"


def parse_lenient_int(raw: object | None) -> int | None:
    """Parse the leading integer of a value, returning None when there is none."""
    if raw is None:
        return None
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    return int(match.group(1))
