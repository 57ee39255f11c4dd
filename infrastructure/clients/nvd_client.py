import requests
import logging
from typing import Dict, List

from core.exceptions import NvdConfigurationError, NvdUpstreamError
from core.interface import INvdClient, ISettingsStore


class NvdClient(INvdClient):
    """
    Adapter: NVD REST API 2.0 (CPE and CVE endpoints)
    The API key is read from the settings store on every call, so a key
    saved at runtime is picked up without a restart.
    """

    def __init__(self, settings: ISettingsStore,
                 base_url: str = "https://services.nvd.nist.gov/rest/json",
                 timeout: float = 10.0):
        self.settings = settings
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def search_products(self, keyword: str) -> List[Dict]:
        data = self._get("cpes/2.0", {'keywordSearch': keyword})
        return data.get('products') or []

    def match_products(self, cpe_match_string: str) -> List[Dict]:
        data = self._get("cpes/2.0", {'cpeMatchString': cpe_match_string})
        return data.get('products') or []

    def get_cves(self, cpe_name: str) -> List[Dict]:
        data = self._get("cves/2.0", {'cpeName': cpe_name})
        return data.get('vulnerabilities') or []

    def check_api_key(self, api_key: str) -> bool:
        """
        Issue the smallest possible CPE query with the given key.
        False when NVD rejects the key; network failures raise NvdUpstreamError.
        """
        try:
            response = requests.get(
                f"{self.base_url}/cpes/2.0",
                params={'resultsPerPage': 1},
                headers={'apiKey': api_key},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.error(f"Error validating NVD API key: {e}")
            raise NvdUpstreamError("cpes/2.0", str(e))

        if response.status_code in (401, 403, 404):
            return False
        if not response.ok:
            raise NvdUpstreamError("cpes/2.0", response.reason or "unexpected response",
                                   status_code=response.status_code)
        return True

    def _get(self, endpoint: str, params: Dict) -> Dict:
        api_key = self.settings.get_nvd_api_key()
        if not api_key:
            raise NvdConfigurationError()

        try:
            response = requests.get(
                f"{self.base_url}/{endpoint}",
                params=params,
                headers={'apiKey': api_key},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.error(f"Error calling NVD {endpoint}: {e}")
            raise NvdUpstreamError(endpoint, str(e))

        if not response.ok:
            self.logger.error(f"NVD {endpoint} returned {response.status_code}")
            raise NvdUpstreamError(endpoint, response.reason or "unexpected response",
                                   status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise NvdUpstreamError(endpoint, f"invalid JSON: {e}")
