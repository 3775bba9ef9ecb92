"""CSV export of stored readings."""

import csv
import io
from collections.abc import Iterable

from bp_tracker.models.reading import Reading

CSV_HEADER = ["Date", "Time", "Systolic", "Diastolic", "Pulse", "Classification"]
CSV_FILENAME = "blood_pressure_readings.csv"


def readings_to_csv(readings: Iterable[Reading]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(CSV_HEADER)
    for r in readings:
        writer.writerow(
            [
                r.timestamp.strftime("%Y-%m-%d"),
                r.timestamp.strftime("%H:%M:%S"),
                r.systolic,
                r.diastolic,
                r.pulse,
                r.classification,
            ]
        )
    return buf.getvalue()
