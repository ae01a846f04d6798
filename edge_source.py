# edge_source.py

"""
Reads (from_id, to_id) relationship records from a CSV file.

The first row is a header; the first two columns of every data row are the
source and target identifiers. Extra columns are ignored.
"""

from collections import namedtuple
from pathlib import Path

import pandas as pd

from graph_errors import MalformedRecord, SourceUnavailable

EdgeRecord = namedtuple("EdgeRecord", ["line", "from_raw", "to_raw"])


def read_edge_records(path, skip_bad_lines=False):
    path = Path(path)
    try:
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            index_col=False,
            skip_blank_lines=False,
            on_bad_lines="skip" if skip_bad_lines else "error",
        )
    except pd.errors.EmptyDataError:
        return
    except pd.errors.ParserError as e:
        raise MalformedRecord(None, str(e), "row does not match header") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(path, e) from e

    if df.empty:
        return
    if len(df.columns) < 2:
        raise MalformedRecord(2, tuple(df.iloc[0]), "expected two fields")

    # header is line 1; blank lines stay in the frame as empty rows so
    # numbering matches the file (unless a quoted field spans lines)
    blank = (df.isna() | (df == "")).all(axis=1)
    for line, (a, b, is_blank) in enumerate(
            zip(df.iloc[:, 0], df.iloc[:, 1], blank), start=2):
        if not is_blank:
            yield EdgeRecord(line, a, b)


def parse_identifier(value, line) -> int:
    if not isinstance(value, str):
        raise MalformedRecord(line, value, "missing field")
    text = value.strip()
    if text.startswith("+"):
        text = text[1:]
    if not text.isdigit() or not text.isascii():
        raise MalformedRecord(line, value)
    try:
        return int(text)
    except ValueError as e:
        # str->int digit limit (sys.get_int_max_str_digits)
        raise MalformedRecord(line, value[:32] + "...", str(e)) from e


def iter_edge_list(path, skip_malformed=False, logger=None):
    skipped = 0
    for rec in read_edge_records(path, skip_bad_lines=skip_malformed):
        try:
            yield (parse_identifier(rec.from_raw, rec.line),
                   parse_identifier(rec.to_raw, rec.line))
        except MalformedRecord as e:
            if not skip_malformed:
                raise
            skipped += 1
            if logger:
                logger.warning("Skipping %s", e)
    if skipped and logger:
        logger.warning("Skipped malformed records: %d", skipped)


def load_edge_list(path, skip_malformed=False, logger=None) -> list:
    path = Path(path)
    if not path.is_file():
        raise SourceUnavailable(path, "no such file")
    pairs = list(iter_edge_list(path, skip_malformed, logger))
    if logger:
        logger.info("Records read from %s: %d", path, len(pairs))
    return pairs
