# turntable/runtime/catalog.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Static catalog of playable items, loaded once from a JSON file."""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from turntable.core.errors import CatalogUnavailable

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "catalog.json"


class CatalogItem(BaseModel):
    """One entry of the catalog file."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    author: str
    url: str


_ITEMS_ADAPTER = TypeAdapter(List[CatalogItem])


class JsonCatalog:
    """
    Catalog provider backed by a JSON array of ``{id, title, author, url}``
    objects. Loading problems do not raise; they leave the catalog
    unavailable and are reported through ``load_error``.
    """

    def __init__(self, path: Union[str, Path] = DEFAULT_CATALOG_PATH, rng: Optional[random.Random] = None) -> None:
        self._path = Path(path)
        self._rng = rng or random.Random()
        self._items: List[CatalogItem] = []
        self._load_error: Optional[str] = None
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def load_error(self) -> Optional[str]:
        return self._load_error

    def load(self) -> None:
        """(Re)read the catalog file, replacing any previously loaded items."""
        self._items = []
        self._load_error = None
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self._load_error = f"Failed to load catalog: {e}"
            logger.error(self._load_error)
            return

        if not isinstance(raw, list):
            self._load_error = "Catalog file must contain an array"
            logger.error(self._load_error)
            return

        try:
            self._items = _ITEMS_ADAPTER.validate_python(raw)
        except PydanticValidationError as e:
            self._load_error = f"Malformed catalog entry: {e.errors()[0]['msg']}"
            logger.error(self._load_error)
            return

        if not self._items:
            self._load_error = "Catalog is empty"
            logger.error(self._load_error)
            return

        logger.info("Loaded %d catalog items from %s", len(self._items), self._path)

    def is_available(self) -> bool:
        return self._load_error is None and len(self._items) > 0

    def get_random_item(self) -> CatalogItem:
        if not self.is_available():
            raise CatalogUnavailable(self._load_error or "Catalog not available")
        return self._rng.choice(self._items)

    def items(self) -> List[CatalogItem]:
        """Return a copy of all loaded items."""
        return list(self._items)
