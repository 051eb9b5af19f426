# wheel_catalog/utils/csv_parser.py
import logging
import re

from utils.columns import HEADER_ANCHORS, PART_NUMBER
from utils.exceptions import EmptyTableError, HeaderNotFoundError

logger = logging.getLogger(__name__)

BOM = "\ufeff"
DEFAULT_SAMPLE_SIZE = 1000

_LINE_BREAK_RE = re.compile(r"\r?\n|\r")


def detect_delimiter(sample: str) -> str:
    """Picks ';' for semicolon-heavy exports (e.g. Romanian Excel), ',' otherwise."""
    comma_count = sample.count(",")
    semicolon_count = sample.count(";")
    if semicolon_count > comma_count and semicolon_count > 0:
        return ";"
    return ","


def _is_blank_row(row) -> bool:
    return all(not cell or not cell.strip() for cell in row)


def parse_table(text: str, delimiter: str = ",") -> list:
    """
    Splits raw CSV text into rows of string cells.

    Quoted cells may contain the delimiter and line breaks; a doubled quote
    inside a quoted cell is a literal quote. CR, LF and CRLF each end one row.
    A trailing row made only of blank cells is dropped.

    :param text: The full CSV payload.
    :param delimiter: The single-character field separator.
    :return: A list of rows, each a list of cell strings.
    """
    table = []
    if not text:
        return table

    row = []
    cell = []
    in_quotes = False
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if in_quotes:
            if char == '"':
                if i + 1 < length and text[i + 1] == '"':
                    cell.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                cell.append(char)
        elif char == '"':
            in_quotes = True
        elif char == delimiter:
            row.append("".join(cell))
            cell = []
        elif char in "\r\n":
            row.append("".join(cell))
            table.append(row)
            row = []
            cell = []
            if char == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
        else:
            cell.append(char)
        i += 1

    row.append("".join(cell))
    if not _is_blank_row(row):
        table.append(row)
    return table


def find_header(table, anchors=HEADER_ANCHORS):
    """
    Locates the header row, skipping any preamble rows above it.

    :return: A tuple (row_index, header_names).
    :raises HeaderNotFoundError: If no row contains every anchor name.
    """
    required = set(anchors)
    for index, row in enumerate(table):
        trimmed = [cell.strip() if cell else "" for cell in row]
        lowered = {cell.lower() for cell in trimmed}
        if required.issubset(lowered):
            headers = [_LINE_BREAK_RE.sub(" ", cell).strip() for cell in trimmed]
            return index, headers
    raise HeaderNotFoundError()


def build_records(rows, headers) -> list:
    """Maps data rows onto the header names. Blank rows produce no record."""
    records = []
    for row in rows:
        if _is_blank_row(row):
            continue
        record = {}
        for index, name in enumerate(headers):
            if name and index < len(row):
                record[name] = row[index]
        records.append(record)
    return records


def parse_catalog(text: str, sample_size: int = DEFAULT_SAMPLE_SIZE) -> list:
    """
    Turns a raw CSV export into a list of product records.

    :param text: The payload exactly as fetched, possibly starting with a BOM.
    :param sample_size: How many leading characters to inspect for the delimiter.
    :return: Records (dicts in header order) that all carry a PartNumber.
    """
    if text.startswith(BOM):
        text = text[1:]

    delimiter = detect_delimiter(text[:sample_size])
    table = parse_table(text, delimiter)
    if not table:
        logger.error("Parsing the CSV produced an empty table.")
        raise EmptyTableError()

    try:
        header_index, headers = find_header(table)
    except HeaderNotFoundError:
        first_lines = "\n".join(_LINE_BREAK_RE.split(text)[:10])
        logger.error(f"CSV header could not be found. First 10 lines:\n{first_lines}")
        raise

    records = build_records(table[header_index + 1:], headers)
    records = [r for r in records if r.get(PART_NUMBER) and r[PART_NUMBER].strip()]
    logger.info(
        f"Parsed {len(table)} rows with delimiter '{delimiter}'; "
        f"header at row {header_index}, {len(records)} products kept."
    )
    return records
