import csv
import io
import os
import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import openpyxl

from models import GscRow
from utils.errors import ParseError
from utils.logger import get_logger

# logger setup
logger = get_logger(__name__)

warnings.filterwarnings("ignore", category=UserWarning, module="openpyxl.styles.stylesheet")

# Column order assumed when the header row is not recognised
POSITIONAL_COLUMNS = {"keyword": 0, "impressions": 1, "clicks": 2, "position": 3}

# Header names used by the GSC performance export (English and Danish UI)
HEADER_ALIASES = {
    "keyword": ("keyword", "query", "queries", "top queries", "mest populære forespørgsler", "forespørgsel"),
    "clicks": ("clicks", "klik"),
    "impressions": ("impressions", "visninger"),
    "position": ("position", "avg. position", "average position", "placering"),
}

QUERIES_SHEET = "Queries"


def _clean_cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().replace('"', "")


def parse_int(value: Any) -> int:
    """Lenient integer parsing: thousands separators dropped, junk becomes 0."""
    if isinstance(value, (int, float)):
        return int(value)
    text = _clean_cell(value).replace(",", "").replace(" ", "")
    try:
        return int(float(text))
    except ValueError:
        return 0


def parse_float(value: Any) -> float:
    """Lenient float parsing: decimal commas accepted, junk becomes 0.0."""
    if isinstance(value, (int, float)):
        return float(value)
    text = _clean_cell(value).replace(",", ".").replace(" ", "")
    try:
        return float(text)
    except ValueError:
        return 0.0


def map_columns(header: Sequence[Any]) -> Dict[str, int]:
    """
    Locate the keyword/clicks/impressions/position columns in a header row.

    Falls back to the positional layout (keyword, impressions, clicks,
    position) unless every column is found by name.
    """
    normalised = [_clean_cell(cell).lower() for cell in header]
    columns: Dict[str, int] = {}
    for field_name, aliases in HEADER_ALIASES.items():
        for index, name in enumerate(normalised):
            if name in aliases:
                columns[field_name] = index
                break
    if len(columns) == len(HEADER_ALIASES):
        return columns
    return dict(POSITIONAL_COLUMNS)


def rows_to_gsc(rows: Sequence[Sequence[Any]]) -> List[GscRow]:
    """Convert raw table rows (header first) into GscRow objects."""
    if not rows:
        return []
    columns = map_columns(rows[0])
    width = max(max(columns.values()) + 1, len(POSITIONAL_COLUMNS))

    parsed: List[GscRow] = []
    for line_no, cells in enumerate(rows[1:], start=2):
        if len(cells) < width:
            if any(_clean_cell(c) for c in cells):
                logger.warning(f"Skipping GSC row {line_no}: expected {width} columns, got {len(cells)}")
            continue
        keyword = _clean_cell(cells[columns["keyword"]])
        if not keyword:
            continue
        parsed.append(
            GscRow(
                keyword=keyword,
                impressions=parse_int(cells[columns["impressions"]]),
                clicks=parse_int(cells[columns["clicks"]]),
                position=parse_float(cells[columns["position"]]),
            )
        )
    return parsed


def _read_source(source: Any) -> Tuple[bytes, str]:
    """Return raw bytes and a file name from a path or an uploaded file."""
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        return path.read_bytes(), path.name
    name = getattr(source, "name", "") or ""
    data = source.getvalue() if hasattr(source, "getvalue") else source.read()
    if isinstance(data, str):
        data = data.encode("utf-8")
    return data, name


def _is_excel(data: bytes, name: str) -> bool:
    if name.lower().endswith((".xlsx", ".xlsm")):
        return True
    # xlsx files are zip archives
    return data[:2] == b"PK"


def _read_excel_rows(data: bytes) -> List[List[Any]]:
    wb = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        sheet = wb[QUERIES_SHEET] if QUERIES_SHEET in wb.sheetnames else wb.active
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        wb.close()


def _read_csv_rows(data: bytes) -> List[List[str]]:
    text = data.decode("utf-8-sig", errors="replace")
    return [row for row in csv.reader(io.StringIO(text)) if row]


def parse_gsc_export(source: Any, filename: Optional[str] = None) -> List[GscRow]:
    """
    Parse a Google Search Console performance export.

    Args:
        source: A file path, or a file-like object such as a Streamlit upload
        filename (str, optional): Overrides the name used to detect the format

    Returns:
        list: GscRow per query row, in file order

    Raises:
        ParseError: When the file cannot be read as CSV or XLSX
    """
    try:
        data, name = _read_source(source)
        name = filename or name
        if _is_excel(data, name):
            rows = _read_excel_rows(data)
        else:
            rows = _read_csv_rows(data)
        gsc_rows = rows_to_gsc(rows)
    except Exception as e:
        logger.error("Error parsing GSC export: %s", str(e))
        raise ParseError(f"Failed to parse GSC export: {str(e)}") from e

    logger.info("Imported %d GSC rows from '%s'", len(gsc_rows), name or "upload")
    return gsc_rows
