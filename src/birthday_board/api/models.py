"""Pydantic models for the birthday image endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class BirthdayImageRequest(BaseModel):
    """Optional inputs accepted in the request body."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    day: int | str | None = None
    month: int | str | None = None
    csv_text: str | None = Field(default=None, alias="csvText")
    csv_url: str | None = Field(default=None, alias="csvUrl")


class DateRange(BaseModel):
    """Inclusive ISO date range of the board."""

    start: str
    end: str


class BirthdayImageResponse(BaseModel):
    """Summary returned after a board is published."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "Image generated successfully"
    date_range: DateRange = Field(alias="dateRange")
    celebrants: int
    uploaded_url: str = Field(alias="uploadedUrl")
    source: str
    degraded_photos: int = Field(default=0, alias="degradedPhotos")
