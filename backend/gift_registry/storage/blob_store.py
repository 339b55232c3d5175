"""Receipt blob store backed by a local directory.

References are opaque to callers: ``put`` hands one out, ``resolve`` turns it
into the URL moderators fetch the receipt from.
"""
import os
import re
import time
import uuid
from pathlib import Path

from gift_registry.config import settings
from gift_registry.errors import NotFoundError, StorageError

_REFERENCE_RE = re.compile(r"^[0-9]+_[0-9a-f]{32}(\.[a-z0-9]{1,8})?$")


class LocalBlobStore:
    def __init__(self, root_dir: str, url_prefix: str = "/api/moderation/receipts"):
        self.root = Path(root_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def put(self, data: bytes, name: str) -> str:
        """Store ``data`` and return its reference. ``name`` only contributes the extension."""
        ext = os.path.splitext(name or "")[1].lower().lstrip(".")
        reference = f"{int(time.time() * 1000)}_{uuid.uuid4().hex}"
        if ext and ext.isalnum() and len(ext) <= 8:
            reference = f"{reference}.{ext}"
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            (self.root / reference).write_bytes(data)
        except OSError as exc:
            raise StorageError("Could not store receipt") from exc
        return reference

    def exists(self, reference: str) -> bool:
        if not reference or not _REFERENCE_RE.match(reference):
            return False
        return (self.root / reference).is_file()

    def path_for(self, reference: str) -> Path:
        if not self.exists(reference):
            raise NotFoundError("Receipt not found")
        return self.root / reference

    def resolve(self, reference: str) -> str:
        return f"{self.url_prefix}/{reference}"


def get_blob_store() -> LocalBlobStore:
    """FastAPI dependency for the configured receipt store."""
    return LocalBlobStore(settings.RECEIPTS_DIR)
