from __future__ import annotations

import json
import os
import tempfile
from typing import TYPE_CHECKING, Any

from archaeolog.config import settings
from archaeolog.utils.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger(__name__)

EMPTY_DOCUMENT: dict[str, list[Any]] = {"users": [], "artifacts": []}


def ensure_storage() -> None:
    """Create the data root, the uploads directory and an empty document if missing."""
    settings.data_root.mkdir(parents=True, exist_ok=True)
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    if not settings.data_file.exists():
        logger.info("Initializing data document at %s", settings.data_file)
        write_json_atomic(settings.data_file, EMPTY_DOCUMENT)


def read_json(path: Path) -> Any:
    """Parse a JSON file. Raises OSError / ValueError on failure."""
    return json.loads(path.read_text(encoding="utf-8"))


def write_json_atomic(path: Path, data: Any) -> None:
    """Write JSON through a temp file in the same directory, then swap it in."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
