"""
Semicolon-delimited dataset loading.

Turns raw text (one perfume per line, header first) into flat string records
plus the list of accord columns discovered from the header.

Example:
    dataset = load_dataset("data/perfume-data.csv")
    print(len(dataset.records), dataset.accord_columns)
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from .config import ACCORD_PREFIXES, DEFAULT_DATASET, DEFAULT_ENCODING, DELIMITER
from .errors import FormatError

Record = Dict[str, str]

_LINE_BREAK = re.compile(r"\r\n|\n")


class Dataset(BaseModel):
    """Parsed records plus the header-ordered column lists."""

    model_config = ConfigDict(frozen=True)

    records: List[Record]
    columns: List[str]
    accord_columns: List[str]

    def __len__(self) -> int:
        return len(self.records)


def find_accord_columns(headers: List[str]) -> List[str]:
    """Return headers that start with a known accord prefix (case-insensitive)."""
    return [h for h in headers if h.lower().startswith(ACCORD_PREFIXES)]


def parse_records(text: str) -> Dataset:
    """Parse delimited text into a Dataset.

    Raises:
        FormatError: fewer than two lines, a header without the delimiter,
            or no accord columns in the header.
    """
    lines = _LINE_BREAK.split(text.strip())
    if len(lines) < 2:
        raise FormatError("File must contain a header and at least one data row.")

    header_fields = lines[0].split(DELIMITER)
    if len(header_fields) <= 1:
        raise FormatError(f"Invalid delimiter. Please use a semicolon ({DELIMITER}) delimited file.")

    headers = [h.strip() for h in header_fields]
    accord_columns = find_accord_columns(headers)
    if not accord_columns:
        prefixes = " or ".join(f"'{p}'" for p in ACCORD_PREFIXES)
        raise FormatError(f"File must contain columns starting with {prefixes}.")

    records: List[Record] = []
    for line in lines[1:]:
        values = [v.strip() for v in line.split(DELIMITER)]
        record: Record = {}
        for i, header in enumerate(headers):
            record[header] = values[i] if i < len(values) else ""
        records.append(record)

    # Rows are already clean strings; skip re-validating every cell
    return Dataset.model_construct(records=records, columns=headers, accord_columns=accord_columns)


def load_dataset(path: Optional[Union[str, Path]] = None, *, encoding: str = DEFAULT_ENCODING) -> Dataset:
    """Read and parse a dataset file.

    Args:
        path: File to read. Defaults to the configured dataset path.
        encoding: Single-byte text encoding of the file.
    """
    csv_path = Path(path) if path else DEFAULT_DATASET

    if not csv_path.exists():
        raise FileNotFoundError(f"Dataset file not found: {csv_path}")

    # newline="" keeps \r\n intact so the parser sees both conventions
    with open(csv_path, "r", encoding=encoding, newline="") as f:
        text = f.read()

    return parse_records(text)
