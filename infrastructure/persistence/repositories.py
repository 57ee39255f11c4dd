import threading
from typing import Optional, List, Dict

from sqlalchemy import select

from core.entities import Sbom
from core.interface import ISbomRepository
from infrastructure.persistence.models import SbomModel


class SQLAlchemySbomRepository(ISbomRepository):
    """Adapter: SQLAlchemy-based persistence (SQLAlchemy 2.x compatible)"""

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self._lock = threading.RLock()

    def create(self, record: Dict) -> Sbom:
        """Insert a new SBOM row; the database assigns the id"""
        with self._lock, self.session_factory() as session:
            row = SbomModel(
                name=record['name'],
                version=record['version'],
                format=record['format'],
                components=record['components'],
                sbom_metadata=record['metadata']
            )
            session.add(row)
            session.commit()
            return self._convert_to_domain(row)

    def get(self, sbom_id: int) -> Optional[Sbom]:
        with self._lock, self.session_factory() as session:
            row = session.get(SbomModel, sbom_id)
            return self._convert_to_domain(row) if row else None

    def list(self) -> List[Sbom]:
        """All SBOMs in insertion order"""
        with self._lock, self.session_factory() as session:
            stmt = select(SbomModel).order_by(SbomModel.id)
            rows = session.execute(stmt).scalars().all()
            return [self._convert_to_domain(r) for r in rows]

    def update(self, sbom_id: int, fields: Dict) -> Optional[Sbom]:
        with self._lock, self.session_factory() as session:
            row = session.get(SbomModel, sbom_id)
            if not row:
                return None

            # Whole-column assignment, so JSON arrays are replaced rather than merged
            for key, value in fields.items():
                if key == 'metadata':
                    row.sbom_metadata = value
                elif key in ('name', 'version', 'format', 'components'):
                    setattr(row, key, value)

            session.commit()
            return self._convert_to_domain(row)

    def delete(self, sbom_id: int) -> bool:
        with self._lock, self.session_factory() as session:
            row = session.get(SbomModel, sbom_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True

    def _convert_to_domain(self, row: SbomModel) -> Sbom:
        """Convert ORM model to domain entity"""
        return Sbom(
            id=row.id,
            name=row.name,
            version=row.version,
            format=row.format,
            components=row.components,
            metadata=row.sbom_metadata
        )
