"""
Range and consistency checks for a three-measurement session.
All problems are collected and reported together.
"""

from dataclasses import dataclass

from bp_tracker.schemas.reading import ReadingInput

MIN_SYSTOLIC, MAX_SYSTOLIC = 60, 250
MIN_DIASTOLIC, MAX_DIASTOLIC = 40, 150
MIN_PULSE, MAX_PULSE = 40, 200

# Max spread (mmHg) between the three measurements of one session
MAX_READING_DIFF = 15


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ReadingValidationError(ValueError):
    """Raised with every failed check; str() is the message shown to the user."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__(self._format(errors))

    @staticmethod
    def _format(errors: list[FieldError]) -> str:
        lines = "".join(f"- {e}\n" for e in errors)
        return f"Validation errors:\n{lines}"


def _validate_single(systolic: int, diastolic: int, pulse: int, num: int) -> list[FieldError]:
    errors: list[FieldError] = []
    if not MIN_SYSTOLIC <= systolic <= MAX_SYSTOLIC:
        errors.append(
            FieldError(f"Systolic Reading {num}", f"must be between {MIN_SYSTOLIC} and {MAX_SYSTOLIC}")
        )
    if not MIN_DIASTOLIC <= diastolic <= MAX_DIASTOLIC:
        errors.append(
            FieldError(f"Diastolic Reading {num}", f"must be between {MIN_DIASTOLIC} and {MAX_DIASTOLIC}")
        )
    if not MIN_PULSE <= pulse <= MAX_PULSE:
        errors.append(FieldError(f"Pulse Reading {num}", f"must be between {MIN_PULSE} and {MAX_PULSE}"))
    if systolic <= diastolic:
        errors.append(FieldError(f"Reading {num}", "systolic pressure must be higher than diastolic pressure"))
    return errors


def validate_readings(body: ReadingInput) -> None:
    """Raise ReadingValidationError when any measurement is out of range or the session is inconsistent."""
    sessions = [
        (body.systolic1, body.diastolic1, body.pulse1),
        (body.systolic2, body.diastolic2, body.pulse2),
        (body.systolic3, body.diastolic3, body.pulse3),
    ]
    errors: list[FieldError] = []
    for num, (systolic, diastolic, pulse) in enumerate(sessions, start=1):
        errors.extend(_validate_single(systolic, diastolic, pulse, num))

    # Spread is only meaningful once every measurement is individually plausible
    if not errors:
        systolics = [s[0] for s in sessions]
        diastolics = [s[1] for s in sessions]
        if max(systolics) - min(systolics) > MAX_READING_DIFF:
            errors.append(
                FieldError("Systolic Readings", f"difference between readings cannot exceed {MAX_READING_DIFF} mmHg")
            )
        if max(diastolics) - min(diastolics) > MAX_READING_DIFF:
            errors.append(
                FieldError("Diastolic Readings", f"difference between readings cannot exceed {MAX_READING_DIFF} mmHg")
            )

    if errors:
        raise ReadingValidationError(errors)
