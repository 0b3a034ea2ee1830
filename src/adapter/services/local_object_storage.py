import asyncio
import logging
from pathlib import Path
from typing import Optional

from src.app.services.object_storage import IObjectStorage, StorageError

logger = logging.getLogger(__name__)


class LocalObjectStorage(IObjectStorage):
    """Filesystem-backed object storage rooted at a directory"""

    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root not in path.parents:
            raise StorageError(f"Key escapes storage root: {key}")
        return path

    def _write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".part")
        with open(tmp_path, "wb") as buffer:
            buffer.write(data)
        tmp_path.replace(path)

    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        path = self._path_for(key)
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as e:
            logger.error("Failed to store object", extra={"key": key})
            raise StorageError(str(e)) from e

    async def get(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        if not path.is_file():
            return None
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise StorageError(str(e)) from e

    async def delete(self, key: str) -> bool:
        path = self._path_for(key)
        if not path.is_file():
            return False
        try:
            await asyncio.to_thread(path.unlink)
        except OSError as e:
            raise StorageError(str(e)) from e
        return True

    async def exists(self, key: str) -> bool:
        return self._path_for(key).is_file()
