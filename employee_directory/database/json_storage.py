"""
Document storage backends for the employee collection
"""
import json
import logging
import os
import tempfile
from typing import Dict, List, Protocol

logger = logging.getLogger(__name__)


class DocumentStorage(Protocol):
    """Whole-collection persistence: read everything, write everything"""

    def load(self) -> List[Dict]:
        ...

    def save_all(self, documents: List[Dict]) -> None:
        ...


class JsonFileStorage:
    """Keeps the collection as one pretty-printed JSON array on disk"""

    def __init__(self, file_path: str):
        self.file_path = file_path

    def load(self) -> List[Dict]:
        if not os.path.exists(self.file_path):
            return []
        with open(self.file_path, "r", encoding="utf-8") as fh:
            content = fh.read()
        if not content.strip():
            return []
        data = json.loads(content)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array in {self.file_path}")
        return data

    def save_all(self, documents: List[Dict]) -> None:
        directory = os.path.dirname(os.path.abspath(self.file_path))
        os.makedirs(directory, exist_ok=True)

        # Write next to the target, then swap it in
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".employees-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(documents, fh, indent=4, ensure_ascii=False)
            os.replace(tmp_path, self.file_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug("💾 Wrote %d employee record(s) to %s", len(documents), self.file_path)


class InMemoryStorage:
    """Volatile backend, handy for scripts and tests"""

    def __init__(self, documents: List[Dict] = None):
        self.documents = [dict(doc) for doc in (documents or [])]

    def load(self) -> List[Dict]:
        return [dict(doc) for doc in self.documents]

    def save_all(self, documents: List[Dict]) -> None:
        self.documents = [dict(doc) for doc in documents]
