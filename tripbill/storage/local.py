import logging
from pathlib import Path

from tripbill.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    def __init__(self, base_dir: str) -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        path = self.base_dir / key
        path.parent.mkdir(parents=True, exist_ok=True)
        # Written beside the target and renamed, so a failed write leaves nothing behind.
        partial = path.with_name(path.name + ".part")
        try:
            partial.write_bytes(data)
            partial.replace(path)
        except OSError:
            partial.unlink(missing_ok=True)
            raise
        resolved = str(path.resolve())
        logger.debug("Saved %s (%d bytes) to %s", key, len(data), resolved)
        return resolved
