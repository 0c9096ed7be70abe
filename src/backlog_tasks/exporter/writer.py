"""Export file writer."""

import os
import tempfile
from pathlib import Path


class ExportWriteError(OSError):
    """The export file could not be written."""

    pass


def write_export(directory: str | Path, filename: str, content: bytes) -> Path:
    """Write content into directory/filename atomically.

    The bytes go to a temp file in the destination directory first and are
    renamed into place, so a failed write never leaves a partial export.

    Returns:
        Path of the written file
    """
    target = Path(directory) / filename
    try:
        fd, temp_path = tempfile.mkstemp(dir=target.parent, prefix=".tmp_", suffix=target.suffix)
    except OSError as e:
        raise ExportWriteError(f"Cannot write to directory '{directory}': {e}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, target)
    except OSError as e:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise ExportWriteError(f"failed to write file {target}: {e}") from e

    return target
