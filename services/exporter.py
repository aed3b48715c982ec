"""Spreadsheet export of the panel's reading list."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from models.readings import Reading

EXPORT_FILENAME = "sensor_data.xlsx"
EXPORT_SHEET_NAME = "SensorData"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    media_type: str = XLSX_MEDIA_TYPE


def readings_to_frame(readings: Sequence[Reading]) -> pd.DataFrame:
    """One row per reading; columns follow first appearance across records."""
    return pd.DataFrame([reading.to_record() for reading in readings])


def export_readings(readings: Sequence[Reading]) -> ExportFile:
    frame = readings_to_frame(readings)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name=EXPORT_SHEET_NAME, index=False)
    logger.info(
        "Exported sensor readings",
        extra={"export_file": EXPORT_FILENAME, "row_count": len(frame)},
    )
    return ExportFile(filename=EXPORT_FILENAME, content=buffer.getvalue())
