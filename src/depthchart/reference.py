"""Read-only reference data: teams and the league position catalog."""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from depthchart.config import PositionCatalog
from depthchart.models import PositionMetadata, Team
from depthchart.persistence import POSITIONS_RESOURCE, TEAMS_RESOURCE, SnapshotStore, StorageError


logger = logging.getLogger(__name__)


class ReferenceData:
    """Loads teams and positions from storage.

    The position catalog is loaded on first use and cached; it is never
    mutated at runtime.
    """

    def __init__(self, storage: SnapshotStore):
        self.storage = storage
        self._catalog: Optional[PositionCatalog] = None
        self._catalog_lock = threading.Lock()

    def teams(self) -> List[Team]:
        raw = self.storage.load(TEAMS_RESOURCE)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StorageError(TEAMS_RESOURCE, "expected a list of teams")
        try:
            return [Team.model_validate(item) for item in raw]
        except PydanticValidationError as exc:
            raise StorageError(TEAMS_RESOURCE, f"invalid team record: {exc}") from exc

    def position_catalog(self) -> PositionCatalog:
        with self._catalog_lock:
            if self._catalog is None:
                self._catalog = PositionCatalog(self._load_positions())
                logger.info("Loaded position catalog with %s positions", len(self._catalog))
            return self._catalog

    def _load_positions(self) -> List[PositionMetadata]:
        raw = self.storage.load(POSITIONS_RESOURCE)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StorageError(POSITIONS_RESOURCE, "expected a list of positions")
        try:
            return [PositionMetadata.model_validate(item) for item in raw]
        except PydanticValidationError as exc:
            raise StorageError(POSITIONS_RESOURCE, f"invalid position record: {exc}") from exc
