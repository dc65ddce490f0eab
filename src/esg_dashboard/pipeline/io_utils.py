# src/esg_dashboard/pipeline/io_utils.py
from __future__ import annotations

import io
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

from esg_dashboard.core.exceptions import UploadError
from esg_dashboard.core.types import RawRow
from esg_dashboard.pipeline.aggregator import build_esg_from_rows

logger = logging.getLogger(__name__)

SPREADSHEET_SUFFIXES = (".xlsx", ".xls")
CSV_SUFFIXES = (".csv",)
JSON_SUFFIXES = (".json",)


def _frame_to_rows(df: pd.DataFrame) -> List[RawRow]:
    # Empty cells come back as NaN; the aggregator expects None
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def read_table_rows(content: bytes, filename: str) -> List[RawRow]:
    """
    Decode the first sheet of a spreadsheet (or a CSV file) into header-keyed rows.
    """
    name = filename.lower()
    try:
        if name.endswith(CSV_SUFFIXES):
            df = pd.read_csv(io.BytesIO(content))
        else:
            df = pd.read_excel(io.BytesIO(content), sheet_name=0)
    except Exception as exc:
        logger.error("upload: failed to read %s: %s", filename, exc)
        raise UploadError("Excel sheet is empty or could not be parsed.") from exc

    return _frame_to_rows(df)


def _is_blank(value: Any) -> bool:
    # Empty objects and lists still count as present
    if isinstance(value, (dict, list)):
        return False
    return not value


def parse_json_dataset(content: bytes) -> Dict[str, Any]:
    """
    Decode an uploaded JSON dataset. It is used as-is once it carries
    both `summary` and `metrics`.
    """
    try:
        parsed = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise UploadError(f"Invalid JSON file: {exc}") from exc

    if not isinstance(parsed, dict) or _is_blank(parsed.get("summary")) or _is_blank(parsed.get("metrics")):
        raise UploadError("JSON must contain summary and metrics fields.")

    return parsed


def load_upload(filename: str, content: bytes) -> Dict[str, Any]:
    """
    Turn an uploaded file into the dashboard dataset dict.

        .json        -> validated and used directly
        .xlsx / .xls -> first sheet -> build_esg_from_rows
        .csv         -> rows -> build_esg_from_rows
    """
    name = (filename or "").lower()

    if name.endswith(JSON_SUFFIXES):
        logger.info("upload: reading JSON dataset %s", filename)
        return parse_json_dataset(content)

    if name.endswith(SPREADSHEET_SUFFIXES + CSV_SUFFIXES):
        rows = read_table_rows(content, name)
        if not rows:
            raise UploadError("Excel sheet is empty or could not be parsed.")

        logger.info("upload: aggregating %d rows from %s", len(rows), filename)
        return build_esg_from_rows(rows).to_dict()

    raise UploadError(
        "Unsupported file type. Please upload .json, .xlsx, .xls or .csv files."
    )


def load_upload_file(path: Union[str, Path]) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(p))
    return load_upload(p.name, p.read_bytes())


def save_report_json(data: Dict[str, Any], out_path: Union[str, Path]) -> Path:
    """
    Save a dataset (or a dataset + insights payload) as pretty-printed JSON.
    """
    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    return path
