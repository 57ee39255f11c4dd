import copy
import threading
from typing import Dict, List, Optional

from core.entities import Sbom
from core.interface import ISbomRepository


class InMemorySbomRepository(ISbomRepository):
    """Adapter: process-local SBOM storage backed by a dict"""

    def __init__(self):
        self._sboms: Dict[int, Sbom] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def create(self, record: Dict) -> Sbom:
        with self._lock:
            sbom_id = self._next_id
            self._next_id += 1
            sbom = Sbom.from_record(sbom_id, copy.deepcopy(record))
            self._sboms[sbom_id] = sbom
            return copy.deepcopy(sbom)

    def get(self, sbom_id: int) -> Optional[Sbom]:
        with self._lock:
            sbom = self._sboms.get(sbom_id)
            return copy.deepcopy(sbom) if sbom else None

    def list(self) -> List[Sbom]:
        with self._lock:
            # dicts keep insertion order
            return [copy.deepcopy(s) for s in self._sboms.values()]

    def update(self, sbom_id: int, fields: Dict) -> Optional[Sbom]:
        with self._lock:
            existing = self._sboms.get(sbom_id)
            if not existing:
                return None

            merged = {**existing.to_record(), **copy.deepcopy(fields)}
            updated = Sbom.from_record(sbom_id, merged)
            self._sboms[sbom_id] = updated
            return copy.deepcopy(updated)

    def delete(self, sbom_id: int) -> bool:
        with self._lock:
            return self._sboms.pop(sbom_id, None) is not None
