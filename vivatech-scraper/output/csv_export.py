"""CSV export of speaker and partner records."""

import csv
import logging
import os
import tempfile

logger = logging.getLogger(__name__)


def write_records(records, output_path: str, columns: list[str]) -> int:
    """
    Write records to a CSV file, replacing it only once every row is written.

    Args:
        records: Objects exposing ``to_row()`` in ``columns`` order
        output_path: Destination file
        columns: Header row

    Returns:
        Number of rows written

    Raises:
        OSError: if the destination cannot be created or written
    """
    directory = os.path.dirname(os.path.abspath(output_path))
    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{os.path.basename(output_path)}.", suffix=".tmp", dir=directory
    )

    count = 0
    try:
        with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(columns)
            for record in records:
                writer.writerow(record.to_row())
                count += 1
        # mkstemp creates 0600 files
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, output_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

    logger.info(f"Exported {count} records to {output_path}")
    return count
