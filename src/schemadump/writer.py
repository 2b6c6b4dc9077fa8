import logging
import os
import tempfile
from pathlib import Path
from pydantic import BaseModel
from .exceptions import OutputError

logger = logging.getLogger(__name__)

def to_json(result: BaseModel) -> str:
    """Two-space indented JSON with camelCase keys and absent fields omitted."""
    return result.model_dump_json(indent=2, by_alias=True, exclude_none=True) + "\n"

def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask

def write_schema(result: BaseModel, path: Path) -> Path:
    """
    Writes the result atomically: a temporary file in the target directory
    replaces the target only once it is completely written.
    """
    path = Path(path)
    try:
        payload = to_json(result)
    except (ValueError, TypeError) as e:
        raise OutputError(f"Failed to serialize schema: {e}") from e

    directory = path.parent
    tmp_name = None
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=directory, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
        # mkstemp creates 0600; give the output the mode a plain open() would
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputError(f"Failed to write {path}: {e}") from e

    logger.debug(f"Wrote {len(payload)} bytes to {path}")
    return path
