import logging
import shutil
import tempfile
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceHandle:
    id: str
    path: Path
    size: int
    mime_type: str = "audio/wav"


class AudioResourceManager:
    """
    Holds at most one playable audio file at a time.

    Every acquire releases the previous handle before the new file is written,
    and release_all() leaves nothing behind once the owner is torn down.
    """

    def __init__(self, root: Optional[Path] = None):
        self._owns_root = root is None
        self.root = Path(root) if root is not None else Path(tempfile.mkdtemp(prefix="scene-audio-"))
        self.root.mkdir(parents=True, exist_ok=True)
        self._current: Optional[ResourceHandle] = None

    @property
    def active(self) -> Optional[ResourceHandle]:
        return self._current

    @property
    def count(self) -> int:
        return 1 if self._current else 0

    def acquire(self, data: bytes) -> ResourceHandle:
        if self._current:
            self.release(self._current)
        handle_id = uuid.uuid4().hex
        path = self.root / f"{handle_id}.wav"
        path.write_bytes(data)
        self._current = ResourceHandle(id=handle_id, path=path, size=len(data))
        log.debug("Acquired audio resource %s (%d bytes)", handle_id, len(data))
        return self._current

    def release(self, handle: Optional[ResourceHandle]) -> None:
        if handle is None or self._current is None or handle.id != self._current.id:
            return
        self._current = None
        handle.path.unlink(missing_ok=True)
        log.debug("Released audio resource %s", handle.id)

    def release_all(self) -> None:
        self.release(self._current)
        if self._owns_root:
            shutil.rmtree(self.root, ignore_errors=True)

    def open(self, handle_id: str) -> Optional[bytes]:
        if not self._current or self._current.id != handle_id:
            return None
        return self._current.path.read_bytes()

    def __enter__(self) -> "AudioResourceManager":
        return self

    def __exit__(self, *exc) -> None:
        self.release_all()
