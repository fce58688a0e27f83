"""
Durable per-client mirror of server state.

One JSON document per key under a cache directory, standing in for the
browser's keyed local storage. Reads never raise: a missing, unreadable or
corrupt entry is logged and reported as absent.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from medicall.config.constants import StorageKey

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ClientCache:
    """Keyed string storage with JSON and pydantic helpers on top."""

    def __init__(self, cache_dir: Union[str, Path]):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: StorageKey) -> Path:
        return self.cache_dir / f"{StorageKey(key).value}.json"

    # ------------------------------------------------------------------ raw
    def get(self, key: StorageKey) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read cache entry {key.value}: {e}")
            return None

    def set(self, key: StorageKey, value: str) -> None:
        path = self._path(key)
        # write-then-rename so a crash never leaves half a document behind
        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: StorageKey) -> None:
        self._path(key).unlink(missing_ok=True)

    # ----------------------------------------------------------------- json
    def load_json(self, key: StorageKey) -> Any:
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Error loading {key.value} from local cache: {e}")
            return None

    def save_json(self, key: StorageKey, value: Any) -> None:
        self.set(key, json.dumps(value, ensure_ascii=False))

    # --------------------------------------------------------------- models
    def load_model(self, key: StorageKey, model: Type[M]) -> Optional[M]:
        data = self.load_json(key)
        if data is None:
            return None
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Ignoring malformed {key.value} in local cache: {e.error_count()} error(s)")
            return None

    def load_models(self, key: StorageKey, model: Type[M]) -> Optional[List[M]]:
        data = self.load_json(key)
        if data is None:
            return None
        try:
            return TypeAdapter(List[model]).validate_python(data)
        except ValidationError as e:
            logger.error(f"Ignoring malformed {key.value} in local cache: {e.error_count()} error(s)")
            return None

    def save_model(self, key: StorageKey, item: BaseModel) -> None:
        self.save_json(key, item.model_dump(mode="json", by_alias=True))

    def save_models(self, key: StorageKey, items: Sequence[BaseModel]) -> None:
        self.save_json(key, [item.model_dump(mode="json", by_alias=True) for item in items])
