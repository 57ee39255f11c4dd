from typing import Any, List

from core.entities import Sbom
from core.exceptions import SbomNotFoundError
from core.interface import ISbomRepository
from core.schema import validate_insert, validate_partial_update


class SbomService:
    """Use Case: validated CRUD over stored SBOM documents"""

    def __init__(self, repository: ISbomRepository):
        self.repository = repository

    def create(self, payload: Any) -> Sbom:
        sbom_create = validate_insert(payload)
        return self.repository.create(sbom_create.to_record())

    def get(self, sbom_id: int) -> Sbom:
        sbom = self.repository.get(sbom_id)
        if not sbom:
            raise SbomNotFoundError(sbom_id)
        return sbom

    def list(self) -> List[Sbom]:
        return self.repository.list()

    def update(self, sbom_id: int, payload: Any) -> Sbom:
        """Replace the supplied top-level fields; arrays are overwritten, not merged"""
        sbom_update = validate_partial_update(payload)
        updated = self.repository.update(sbom_id, sbom_update.to_fields())
        if not updated:
            raise SbomNotFoundError(sbom_id)
        return updated

    def delete(self, sbom_id: int) -> None:
        if not self.repository.delete(sbom_id):
            raise SbomNotFoundError(sbom_id)
