"""
Block property stores holding the persisted annotation string of each
image block.

The document framework owns the real store; these implementations back the
demo application and the tests.
"""
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol

from annotated_image.utils.paths import get_app_data_dir

logger = logging.getLogger(__name__)


class BlockPropertyStore(Protocol):
    """String property per image block."""

    def get(self, block_id: str) -> Optional[str]:
        ...

    def set(self, block_id: str, value: str) -> None:
        ...


class MemoryPropertyStore:
    """Keeps block properties in a dictionary."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, block_id: str) -> Optional[str]:
        return self._values.get(block_id)

    def set(self, block_id: str, value: str) -> None:
        self._values[block_id] = value

    def snapshot(self) -> Dict[str, str]:
        return dict(self._values)


class JsonFilePropertyStore:
    """
    Persists block properties to a JSON file.

    The file maps block id to the annotation string. It is rewritten on
    every ``set``.
    """

    def __init__(self, file_path: Optional[Path] = None):
        if file_path is None:
            file_path = get_app_data_dir() / "annotations.json"
        self.file_path = Path(file_path)
        self._values: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load block properties from %s: %s", self.file_path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring block property file %s: not an object", self.file_path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, block_id: str) -> Optional[str]:
        return self._values.get(block_id)

    def set(self, block_id: str, value: str) -> None:
        self._values[block_id] = value
        self._save()

    def _save(self) -> None:
        os.makedirs(self.file_path.parent, exist_ok=True)
        tmp_path = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(self._values, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.file_path)
