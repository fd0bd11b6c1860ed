from pathlib import Path

from docanalytics.store.base import BlobStore
from docanalytics.store.exceptions import BlobNotFoundError, InvalidBlobKeyError


class LocalBlobStore(BlobStore):
    """Keeps artifact bytes on the local filesystem under a root directory."""

    def __init__(self, files_root: Path) -> None:
        self._files_root = files_root.resolve()

    def store(self, data: bytes, key: str) -> str:
        path = self._resolve(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return str(path)

    def fetch(self, path: str) -> bytes:
        resolved = self._resolve(path)
        if not resolved.exists():
            raise BlobNotFoundError(f"File not found: {resolved}")
        return resolved.read_bytes()

    def remove(self, path: str) -> bool:
        resolved = self._resolve(path)
        if not resolved.exists():
            return False
        resolved.unlink()
        return True

    def _resolve(self, key: str) -> Path:
        path = (self._files_root / key).resolve()
        if not path.is_relative_to(self._files_root):
            raise InvalidBlobKeyError(f"Key '{key}' escapes the storage root")
        return path
