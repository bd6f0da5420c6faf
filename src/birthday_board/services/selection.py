"""Birthday selection for a date window."""

from collections.abc import Iterable

from birthday_board.domain.employees import Celebrant, EmployeeRecord
from birthday_board.domain.render import DateWindow


def select_celebrants(
    roster: Iterable[EmployeeRecord], window: DateWindow
) -> list[Celebrant]:
    """Return employees with a birthday inside the window, in roster order."""
    window_days = {(day.day, day.month) for day in window}
    matches = [
        employee
        for employee in roster
        if (employee.birth_day, employee.birth_month) in window_days
    ]
    return [
        Celebrant(index=index, employee=employee)
        for index, employee in enumerate(matches)
    ]
