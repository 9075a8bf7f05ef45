import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List

from fastapi import Request

from exam_backend.exceptions import StorageError

logger = logging.getLogger(__name__)

STUDENTS = "students"
TESTS = "tests"
ATTEMPTS = "attempts"
COLLECTIONS = (STUDENTS, TESTS, ATTEMPTS)
DEFAULT_MODE = 0o644


class JsonStore:
    """
    Three named collections, each persisted as one JSON array of objects
    under ``base_dir``. Every load reads the whole file and every save
    rewrites it.
    """

    def __init__(self, base_dir):
        self.base_dir = Path(base_dir)
        self._locks: Dict[str, asyncio.Lock] = {name: asyncio.Lock() for name in COLLECTIONS}

    def path(self, collection: str) -> Path:
        if collection not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {collection}")
        return self.base_dir / f"{collection}.json"

    def lock(self, collection: str) -> asyncio.Lock:
        """Lock held across a read-modify-write cycle on ``collection``."""
        if collection not in self._locks:
            raise KeyError(f"Unknown collection: {collection}")
        return self._locks[collection]

    def ensure_initialized(self) -> None:
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            for name in COLLECTIONS:
                path = self.path(name)
                if not path.exists():
                    path.write_text("[]", encoding="utf-8")
                    logger.info("Created empty collection %s", path)
        except OSError as e:
            raise StorageError(f"Cannot initialize storage at {self.base_dir}") from e

    def load(self, collection: str) -> List[dict]:
        path = self.path(collection)
        try:
            with open(path, "r", encoding="utf-8") as f:
                documents = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read collection '{collection}'") from e

        if not isinstance(documents, list):
            raise StorageError(f"Collection '{collection}' is not a JSON array")
        return documents

    def save(self, collection: str, documents: List[dict]) -> None:
        path = self.path(collection)
        tmp_path = None
        try:
            try:
                mode = os.stat(path).st_mode & 0o777
            except FileNotFoundError:
                mode = DEFAULT_MODE
            fd, tmp_path = tempfile.mkstemp(dir=self.base_dir, prefix=f".{collection}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(documents, tmp, indent=2, ensure_ascii=False)
            # mkstemp files are owner-only; keep the mode the collection had
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"Cannot write collection '{collection}'") from e

    async def aload(self, collection: str) -> List[dict]:
        return await asyncio.to_thread(self.load, collection)

    async def asave(self, collection: str, documents: List[dict]) -> None:
        # Run blocking I/O in thread pool to avoid blocking event loop
        await asyncio.to_thread(self.save, collection, documents)


def get_db(request: Request) -> JsonStore:
    return request.app.state.db
