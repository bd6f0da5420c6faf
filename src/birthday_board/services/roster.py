"""Roster ingestion from CSV text, a CSV URL or the bundled roster file."""

import csv
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

from birthday_board.domain.employees import EmployeeRecord
from birthday_board.domain.errors import InvalidRequestError

RosterSourceLabel = Literal["csvText", "csvUrl", "local"]

logger = logging.getLogger(__name__)


class CsvClient(Protocol):
    """Interface for downloading roster CSV files."""

    async def download_text(self, url: str) -> str:
        """Download a CSV document and return its text."""


@dataclass(frozen=True)
class Roster:
    """Parsed roster with the source it came from."""

    employees: list[EmployeeRecord]
    source: RosterSourceLabel


def parse_roster_csv(text: str) -> list[EmployeeRecord]:
    """Parse roster CSV text with a header row into employee records."""
    cleaned = text.lstrip("\ufeff")
    reader = csv.DictReader(io.StringIO(cleaned))
    if not reader.fieldnames:
        raise InvalidRequestError("Roster CSV has no header row")
    reader.fieldnames = [name.strip() for name in reader.fieldnames]
    return [EmployeeRecord.from_row(row) for row in reader]


@dataclass
class RosterService:
    """Loads the roster, preferring inline text over a URL over the local file."""

    csv_client: CsvClient
    local_path: Path

    async def load(self, csv_text: str | None, csv_url: str | None) -> Roster:
        """Return the parsed roster from the highest-priority available source."""
        if csv_text:
            return Roster(employees=parse_roster_csv(csv_text), source="csvText")
        if csv_url:
            try:
                text = await self.csv_client.download_text(csv_url)
            except Exception as exc:
                logger.warning("Roster download failed: %s", csv_url)
                raise InvalidRequestError(
                    f"Failed to download csvUrl: {exc}"
                ) from exc
            return Roster(employees=parse_roster_csv(text), source="csvUrl")
        if not self.local_path.exists():
            raise InvalidRequestError(
                "Missing csvText/csvUrl and local roster file not found"
            )
        text = self.local_path.read_text(encoding="utf-8-sig")
        return Roster(employees=parse_roster_csv(text), source="local")
