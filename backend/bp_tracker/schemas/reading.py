"""Pydantic schemas for the reading form, stats and submit response."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

MEASUREMENT_FIELDS = tuple(f"{kind}{i}" for i in (1, 2, 3) for kind in ("systolic", "diastolic", "pulse"))


def _truncated_mean(a: int, b: int, c: int) -> int:
    # integer mean truncated toward zero
    return int((a + b + c) / 3)


class AverageResponse(BaseModel):
    """Rounded mean over a window; also the shape of a freshly averaged session."""

    systolic: int
    diastolic: int
    pulse: int


class ReadingInput(BaseModel):
    """
    Three consecutive measurements as posted by the form.

    Fields must be JSON integers; strings and floats are rejected. A null or
    missing measurement counts as 0 and is then caught by range validation.
    `timestamp` is accepted for compatibility but the server stamps every
    reading with its own clock.
    """

    timestamp: StrictStr | None = None

    systolic1: StrictInt = 0
    diastolic1: StrictInt = 0
    pulse1: StrictInt = 0

    systolic2: StrictInt = 0
    diastolic2: StrictInt = 0
    pulse2: StrictInt = 0

    systolic3: StrictInt = 0
    diastolic3: StrictInt = 0
    pulse3: StrictInt = 0

    @field_validator(*MEASUREMENT_FIELDS, mode="before")
    @classmethod
    def null_is_zero(cls, v):
        return 0 if v is None else v

    def average(self) -> AverageResponse:
        return AverageResponse(
            systolic=_truncated_mean(self.systolic1, self.systolic2, self.systolic3),
            diastolic=_truncated_mean(self.diastolic1, self.diastolic2, self.diastolic3),
            pulse=_truncated_mean(self.pulse1, self.pulse2, self.pulse3),
        )


class ReadingResponse(BaseModel):
    """Single stored reading as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: datetime
    systolic: int
    diastolic: int
    pulse: int
    classification: str


class StatsResponse(BaseModel):
    """Last reading plus 7-day, 30-day and all-time averages. Averages are null for empty windows."""

    last_reading: ReadingResponse | None = None
    seven_day_avg: AverageResponse | None = None
    seven_day_count: int = 0
    thirty_day_avg: AverageResponse | None = None
    thirty_day_count: int = 0
    all_time_avg: AverageResponse | None = None
    all_time_count: int = 0


class ClassificationResponse(BaseModel):
    """Category as the page script reads it (capitalized keys)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")
    description: str = Field(alias="Description")
    risk: str = Field(alias="Risk")


class SubmitResponse(BaseModel):
    message: str
    stats: StatsResponse
    classification: ClassificationResponse
    recommendation: str
