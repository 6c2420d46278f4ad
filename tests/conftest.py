"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from gridframe.ingestion import CSVFile


@pytest.fixture
def temperature_csv() -> str:
    """Header plus four rows at two times with two data columns."""
    return (
        "t,x,y,z,temp,humidity\n"
        "0,0,0,0,25.0,0.5\n"
        "0,1,0,0,26.0,0.4\n"
        "1,0,0,0,24.5,0.6\n"
        "1,1,0,0,25.5,0.45\n"
    )


@pytest.fixture
def headerless_csv() -> str:
    """Same layout as temperature_csv without the header row."""
    return (
        "0,0,0,0,25.0,0.5\n"
        "0,1,0,0,26.0,0.4\n"
        "1,0,0,0,24.5,0.6\n"
        "1,1,0,0,25.5,0.45\n"
    )


@pytest.fixture
def temperature_source(temperature_csv: str) -> CSVFile:
    """In-memory source with a header."""
    return CSVFile.from_text(temperature_csv)


@pytest.fixture
def temperature_file(tmp_path: Path, temperature_csv: str) -> Path:
    """Temperature CSV written to disk."""
    path = tmp_path / "temperature.csv"
    path.write_text(temperature_csv, encoding="utf-8")
    return path
