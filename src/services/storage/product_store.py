"""File-backed persistence for the product collection."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from threading import RLock
from typing import Any

from src.config import settings

logger = logging.getLogger(__name__)

_product_store: ProductStore | None = None


class ProductStore:
    """Load and atomically save the whole collection as one JSON file.

    Records are kept as decoded JSON so fields the API does not know about
    survive a rewrite. The store keeps nothing in memory between calls.
    Callers that read, mutate and write back must hold ``lock`` for the
    whole sequence so that concurrent writers in this process do not lose
    each other's updates. Separate processes sharing the file are not
    coordinated; the last rename wins.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.lock = RLock()

    @property
    def temp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    def load(self) -> list[Any]:
        """Return the persisted records as-is, or an empty list for missing or corrupt data.

        Records are not validated; whatever the array holds is returned and
        written back unchanged by ``save``.

        Raises:
            OSError: If the file exists but cannot be read.
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []

        if not raw.strip():
            return []

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as error:
            logger.warning("Ignoring unparseable product file %s: %s", self.path, error)
            return []

        if not isinstance(payload, list):
            logger.warning(
                "Ignoring product file %s: expected a JSON array, got %s",
                self.path,
                type(payload).__name__,
            )
            return []

        return payload

    def save(self, products: Sequence[Any]) -> None:
        """Write the ``products`` records to a temporary file, then rename it over the real one.

        Raises:
            OSError: If writing or renaming fails. The original file is left
                untouched and the temporary file is removed when possible.
        """
        document = json.dumps(list(products), indent=2)
        temp_path = self.temp_path

        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                handle.write(document)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, self.path)
        except OSError:
            self._discard_temp_file()
            raise

        logger.debug("Saved %d products to %s", len(products), self.path)

    def _discard_temp_file(self) -> None:
        try:
            self.temp_path.unlink(missing_ok=True)
        except OSError as error:
            logger.warning("Could not remove temporary file %s: %s", self.temp_path, error)

    @staticmethod
    def next_id(products: Sequence[Any]) -> int:
        """Next id is one past the highest integer id currently in the collection."""

        ids = (
            record["id"]
            for record in products
            if isinstance(record, dict)
            and isinstance(record.get("id"), int)
            and not isinstance(record["id"], bool)
        )
        return max(ids, default=0) + 1


def get_product_store() -> ProductStore:
    """Return the process-wide store for the configured file."""

    global _product_store
    if _product_store is None:
        _product_store = ProductStore(settings.products_path)
    return _product_store
