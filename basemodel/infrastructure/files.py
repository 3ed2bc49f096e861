from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def read_bytes(path: Path) -> Optional[bytes]:
    """Raw file contents, or ``None`` when the file is missing or unreadable."""
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return None


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_bytes(path: Path, data: bytes, *, atomic: bool = True) -> None:
    """
    Write *data* to *path*, creating parent directories.

    With *atomic* the bytes go to a temp file in the same directory which is
    then renamed over *path*, so readers never see a partial file. Errors are
    raised to the caller.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not atomic:
        with path.open("wb") as f:
            f.write(data)
        return

    mode = _target_mode(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            tmp_path.unlink()
        except FileNotFoundError:
            pass
        raise
