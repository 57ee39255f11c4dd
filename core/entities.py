from dataclasses import dataclass, field
from typing import List, Dict, Optional
from enum import Enum


class Severity(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


def get_severity(cvss_score: float) -> Severity:
    """Map a CVSS base score onto the four NVD severity buckets"""
    if cvss_score >= 9.0:
        return Severity.CRITICAL
    if cvss_score >= 7.0:
        return Severity.HIGH
    if cvss_score >= 4.0:
        return Severity.MEDIUM
    return Severity.LOW


@dataclass
class Sbom:
    """Aggregate root: a stored SBOM document"""
    id: int
    name: str
    version: str
    format: str
    components: List[Dict] = field(default_factory=list)
    metadata: Dict = field(default_factory=dict)

    @classmethod
    def from_record(cls, sbom_id: int, record: Dict) -> 'Sbom':
        return cls(
            id=sbom_id,
            name=record['name'],
            version=record['version'],
            format=record['format'],
            components=record['components'],
            metadata=record['metadata']
        )

    def to_record(self) -> Dict:
        """Top-level fields without the id, as accepted by a repository"""
        return {
            'name': self.name,
            'version': self.version,
            'format': self.format,
            'components': self.components,
            'metadata': self.metadata
        }

    def to_dict(self) -> Dict:
        return {'id': self.id, **self.to_record()}


@dataclass
class CpeName:
    """Parsed CPE 2.3 formatted string"""
    part: str
    vendor: str
    product: str
    version: str
    raw: str

    @classmethod
    def parse(cls, cpe_name: str) -> Optional['CpeName']:
        """
        cpe:2.3:<part>:<vendor>:<product>:<version>:...
        Returns None when the string is too short to carry a version slot.
        """
        if not cpe_name:
            return None

        parts = cpe_name.split(':')
        if len(parts) < 6:
            return None

        return cls(
            part=parts[2],
            vendor=parts[3],
            product=parts[4],
            version=parts[5] if parts[5] != '*' else '',
            raw=cpe_name
        )

    def to_dict(self) -> Dict:
        return {
            'vendor': self.vendor,
            'product': self.product,
            'version': self.version,
            'type': self.part
        }
