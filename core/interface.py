from abc import ABC, abstractmethod
from typing import List, Dict, Optional

from core.entities import Sbom


class ISbomRepository(ABC):
    """Port: SBOM persistence"""

    @abstractmethod
    def create(self, record: Dict) -> Sbom:
        pass

    @abstractmethod
    def get(self, sbom_id: int) -> Optional[Sbom]:
        pass

    @abstractmethod
    def list(self) -> List[Sbom]:
        pass

    @abstractmethod
    def update(self, sbom_id: int, fields: Dict) -> Optional[Sbom]:
        """Shallow merge: supplied top-level fields replace the stored ones"""
        pass

    @abstractmethod
    def delete(self, sbom_id: int) -> bool:
        pass


class INvdClient(ABC):
    """Port: National Vulnerability Database REST API"""

    @abstractmethod
    def search_products(self, keyword: str) -> List[Dict]:
        """Raw `products` entries of a CPE keyword search"""
        pass

    @abstractmethod
    def match_products(self, cpe_match_string: str) -> List[Dict]:
        """Raw `products` entries matching a CPE match string"""
        pass

    @abstractmethod
    def get_cves(self, cpe_name: str) -> List[Dict]:
        """Raw `vulnerabilities` entries affecting a CPE name"""
        pass

    @abstractmethod
    def check_api_key(self, api_key: str) -> bool:
        pass


class ISettingsStore(ABC):
    """Port: Runtime settings (NVD API key)"""

    @abstractmethod
    def get_nvd_api_key(self) -> Optional[str]:
        pass

    @abstractmethod
    def set_nvd_api_key(self, api_key: str) -> None:
        pass

    def has_nvd_api_key(self) -> bool:
        return bool(self.get_nvd_api_key())
