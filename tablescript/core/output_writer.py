"""Persist generated DDL to .sql files."""
import logging
from datetime import datetime
from pathlib import Path
from typing import Union

from tablescript.config import settings
from tablescript.core.errors import OutputWriteError

logger = logging.getLogger(__name__)

FILENAME_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def batch_filename(table_name: str) -> str:
    return f"{table_name.lower()}.sql"


def timestamped_filename(table_name: str, now: datetime) -> str:
    return f"{table_name.lower()}_{now.strftime(FILENAME_TIMESTAMP_FORMAT)}.sql"


def interactive_save_dir(root: Union[str, Path] = ".") -> Path:
    """scripts/tables under `root`; subfolders are only created when something is saved."""
    return Path(root) / settings.SCRIPTS_DIR / settings.TABLES_SUBDIR


def write_ddl(ddl: str, directory: Union[str, Path], filename: str) -> Path:
    """Write `ddl` as UTF-8 into directory/filename, creating the directory if needed."""
    path = Path(directory) / filename
    data = ddl.encode("utf-8")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        resolved = path.resolve()
    except OSError as e:
        raise OutputWriteError(path, e) from e
    logger.debug("Wrote %d bytes to %s", len(data), resolved)
    return resolved
