"""Local snapshot of the last-seen KEV catalog."""

import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional, Union

from kev_push import (
    CacheReadError,
    CacheWriteError,
    CatalogDocument,
    ParseError,
    parse_document,
    serialize_document,
)

logger = logging.getLogger(__name__)

APP_CACHE_NAME = "kev-cache"
SNAPSHOT_FILENAME = "kev.json"


def default_cache_dir(platform: Optional[str] = None) -> Path:
    """Return the per-user cache directory for kev-push.

    ``$KEV_PUSH_CACHE_DIR`` wins when set. Otherwise Windows uses
    ``%LOCALAPPDATA%`` and everything else ``$XDG_CACHE_HOME`` (falling back
    to ``~/.cache``), with a ``kev-cache`` subdirectory.
    """
    override = os.environ.get("KEV_PUSH_CACHE_DIR")
    if override:
        return Path(override)

    platform = platform or sys.platform
    if platform.startswith("win"):
        base = os.environ.get("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
    else:
        base = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / APP_CACHE_NAME


class SnapshotStore:
    """Reads and replaces the single cached catalog file.

    ``save`` is the only operation that mutates anything on disk.
    """

    def __init__(self, cache_dir: Union[str, Path, None] = None,
                 filename: str = SNAPSHOT_FILENAME):
        self.cache_dir = Path(cache_dir) if cache_dir else default_cache_dir()
        self.path = self.cache_dir / filename

    def exists(self) -> bool:
        try:
            return self.path.is_file()
        except OSError as exc:
            raise CacheReadError(f"cannot inspect snapshot {self.path}: {exc}") from exc

    def load(self) -> CatalogDocument:
        try:
            payload = self.path.read_bytes()
        except OSError as exc:
            raise CacheReadError(f"cannot read snapshot {self.path}: {exc}") from exc

        try:
            doc = parse_document(payload)
        except ParseError as exc:
            raise CacheReadError(f"snapshot {self.path} is corrupt: {exc}") from exc

        logger.debug("Loaded snapshot %s (released %s)", self.path, doc.release_date)
        return doc

    def save(self, doc: CatalogDocument) -> None:
        """Replace the snapshot with ``doc``.

        The document is written to a temporary file beside the snapshot and
        renamed into place, so an interrupted write leaves the previous
        snapshot intact.
        """
        try:
            payload = serialize_document(doc)
        except UnicodeEncodeError as exc:
            raise CacheWriteError(f"cannot encode snapshot {self.path}: {exc}") from exc

        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            fd, tmppath = tempfile.mkstemp(
                prefix=self.path.name + ".", suffix=".tmp", dir=str(self.cache_dir)
            )
        except OSError as exc:
            raise CacheWriteError(f"cannot write snapshot {self.path}: {exc}") from exc

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmppath, self.path)
        except OSError as exc:
            try:
                os.remove(tmppath)
            except OSError:
                pass
            raise CacheWriteError(f"cannot write snapshot {self.path}: {exc}") from exc

        logger.debug("Wrote snapshot %s (%d bytes)", self.path, len(payload))
