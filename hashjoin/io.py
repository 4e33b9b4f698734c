"""CSV result emission and output sinks."""

from __future__ import annotations

import csv
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Sequence, TextIO, Union

from hashjoin.exceptions import OutputWriteError

logger = logging.getLogger(__name__)

# Comma delimited, quotes only where a field needs them, "\n" line endings.
CSV_DIALECT_OPTIONS = {
    "delimiter": ",",
    "quotechar": '"',
    "quoting": csv.QUOTE_MINIMAL,
    "lineterminator": "\n",
}


def write_csv_rows(writer: TextIO, header: Sequence[str], rows: Iterable[Sequence[str]]) -> int:
    """Write ``header`` then ``rows`` to ``writer``; return the data row count."""
    csv_writer = csv.writer(writer, **CSV_DIALECT_OPTIONS)
    csv_writer.writerow(header)
    count = 0
    for row in rows:
        csv_writer.writerow(row)
        count += 1
    writer.flush()
    return count


@contextmanager
def atomic_output(path: Union[str, Path]) -> Iterator[TextIO]:
    """Open a hidden temp file next to ``path`` and move it into place on success.

    If the body raises, the temp file is removed and ``path`` is left as it
    was. OS-level failures are reported as :class:`OutputWriteError`.
    """
    final_path = Path(path)
    tmp_path = final_path.with_name(f".{final_path.name}.tmp")
    try:
        final_path.parent.mkdir(parents=True, exist_ok=True)
        handle = tmp_path.open("w", encoding="utf-8", newline="")
    except OSError as exc:
        raise OutputWriteError(
            f"cannot create output {final_path}", path=str(final_path), original_error=exc
        ) from exc

    try:
        with handle:
            yield handle
        tmp_path.replace(final_path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise OutputWriteError(
            f"cannot write output {final_path}", path=str(final_path), original_error=exc
        ) from exc
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug("Committed output to %s", final_path)
