"""
Readers for the tab-delimited record stream and the reference file.

Records follow the sequence-summary layout::

    cds_id  accession  date_first_seen  strain_count  country_first_seen  aa_aln  cds_aln

Only ``aa_aln`` feeds the graph; the other fields are checked for
presence but otherwise ignored.
"""

import csv
import io
import logging
from pathlib import Path
from typing import IO, List, Union

import pandas as pd

from convergraph.exceptions import ConfigurationError, RecordParseError

logger = logging.getLogger(__name__)

ALIGNMENT_FIELD = "aa_aln"

RECORD_FIELDS = (
    "cds_id",
    "accession",
    "date_first_seen",
    "strain_count",
    "country_first_seen",
    ALIGNMENT_FIELD,
    "cds_aln",
)


def _read_text(source: Union[str, Path, IO[str]]) -> str:
    if isinstance(source, (str, Path)):
        try:
            return Path(source).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read records from {source}: {e.strerror or e}") from e
    return source.read()


def _check_field_counts(text: str, has_header: bool) -> None:
    """
    Require every non-empty line to have the same number of fields.

    The width is set by the header when there is one, and is the seven
    record fields otherwise.

    Raises:
        RecordParseError: Naming the first line with a different width
    """
    expected = None if has_header else len(RECORD_FIELDS)
    for line_no, line in enumerate(text.split("\n"), start=1):
        line = line.rstrip("\r")
        if not line:
            continue
        n_fields = line.count("\t") + 1
        if expected is None:
            expected = n_fields
        elif n_fields != expected:
            raise RecordParseError(
                f"Expected {expected} fields, found {n_fields}", line=line_no
            )


def read_records(
    source: Union[str, Path, IO[str]],
    has_header: bool = False,
) -> List[bytes]:
    """
    Read aligned amino-acid sequences from a tab-delimited record stream.

    With ``has_header`` the first row names the columns and must include
    ``aa_aln``. Without it, every row is data laid out as the seven record
    fields in order. Every data row must have exactly as many fields as
    the header (or seven without one); truncated or widened rows are
    errors, never padded.

    Args:
        source: File path or open text stream (e.g. ``sys.stdin``)
        has_header: Whether the first row is a header

    Returns:
        One ``aa_aln`` byte string per record, in input order

    Raises:
        RecordParseError: On malformed records or a missing header
        ConfigurationError: If a record file cannot be read
    """
    text = _read_text(source)
    _check_field_counts(text, has_header)

    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep="\t",
            header=0 if has_header else None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            index_col=False,
            quoting=csv.QUOTE_NONE,
        )
    except pd.errors.EmptyDataError:
        if has_header:
            raise RecordParseError("Input is missing headers") from None
        logger.warning("Input record stream is empty")
        return []
    except pd.errors.ParserError as e:
        raise RecordParseError(f"Malformed record: {e}") from e

    if has_header:
        if ALIGNMENT_FIELD not in df.columns:
            raise RecordParseError(
                f"Header is missing required field '{ALIGNMENT_FIELD}' "
                f"(found: {', '.join(map(str, df.columns))})",
                line=1,
            )
    else:
        df.columns = list(RECORD_FIELDS)

    sequences = [value.encode("utf-8") for value in df[ALIGNMENT_FIELD]]
    logger.info("Read %d records", len(sequences))
    return sequences


def read_reference(path: Union[str, Path]) -> bytes:
    """
    Load the reference sequence.

    The whole file is the sequence; only trailing line terminators are
    removed.

    Raises:
        ConfigurationError: If the file cannot be read or is empty
    """
    path = Path(path)
    try:
        reference = path.read_bytes().rstrip(b"\r\n")
    except OSError as e:
        raise ConfigurationError(f"Bad reference file {path}: {e.strerror or e}") from e
    if not reference:
        raise ConfigurationError(f"Bad reference file {path}: no sequence found")
    logger.debug("Loaded reference of length %d from %s", len(reference), path)
    return reference
