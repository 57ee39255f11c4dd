from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class SearchOptionDTO:
    """DTO for a component search option"""
    value: str
    label: str
    cpe: Optional[str] = None

    def to_dict(self) -> Dict:
        result = {'value': self.value, 'label': self.label}
        if self.cpe:
            result['cpe'] = self.cpe
        return result


@dataclass
class VersionDTO:
    """DTO for a product version known to NVD"""
    version: str
    release_date: Optional[str] = None
    cpe: Optional[str] = None
    references: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'version': self.version,
            'releaseDate': self.release_date,
            'cpe': self.cpe,
            'references': self.references
        }


@dataclass
class VulnerabilityDTO:
    """DTO for vulnerability output"""
    id: str
    description: str
    severity: str
    cvss_score: float
    published_date: Optional[str]
    last_modified_date: Optional[str]
    references: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'description': self.description,
            'severity': self.severity,
            'cvssScore': self.cvss_score,
            'publishedDate': self.published_date,
            'lastModifiedDate': self.last_modified_date,
            'references': self.references
        }


@dataclass
class KeyUpdateResultDTO:
    message: str
    validated: bool

    def to_dict(self) -> Dict:
        return {'message': self.message, 'validated': self.validated}
