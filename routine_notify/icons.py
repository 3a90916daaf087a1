from __future__ import annotations
import hashlib
from pathlib import Path
from typing import TYPE_CHECKING

from .validation import validate_icon_upload

if TYPE_CHECKING:
    from .store import RecordStore

VALID_ICON_EXTENSIONS = (".png", ".jpg", ".jpeg", ".ico", ".svg")
ICON_PREFIX = "custom_"


def icon_filename(data: bytes, original_name: str) -> str:
    """
    Content-addressed name for an uploaded icon: custom_<md5 hex><ext>.

    Same bytes always give the same name, whatever the original name was.
    The extension keeps its original case.
    """
    digest = hashlib.md5(data).hexdigest()
    return f"{ICON_PREFIX}{digest}{Path(original_name).suffix}"


def is_valid_icon_name(name: str) -> bool:
    return Path(name).suffix.lower() in VALID_ICON_EXTENSIONS


class IconIngestor:
    def __init__(self, store: "RecordStore"):
        self.store = store

    def ingest(self, data: bytes, file_name: str) -> str:
        validate_icon_upload(data, file_name)
        return self.store.store_icon(data, file_name)
