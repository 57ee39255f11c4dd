import logging
from typing import Any, Dict

from application.dtos import KeyUpdateResultDTO
from core.exceptions import NvdUpstreamError, SbomValidationError
from core.interface import INvdClient, ISettingsStore


class SettingsService:
    """Use Case: manage the NVD API key used by all lookups"""

    def __init__(self, settings: ISettingsStore, nvd_client: INvdClient):
        self.settings = settings
        self.nvd_client = nvd_client
        self.logger = logging.getLogger(__name__)

    def status(self) -> Dict:
        return {'hasNvdApiKey': self.settings.has_nvd_api_key()}

    def update_nvd_key(self, payload: Any) -> KeyUpdateResultDTO:
        """
        Persist the key, then try it against NVD. The key is kept even when
        validation is impossible; `validated` tells the caller which case applied.
        """
        api_key = payload.get('apiKey') if isinstance(payload, dict) else None
        if not isinstance(api_key, str) or not api_key.strip():
            raise SbomValidationError("API key is required")

        api_key = api_key.strip()
        if '\n' in api_key or '\r' in api_key:
            raise SbomValidationError("API key must be a single line")

        self.settings.set_nvd_api_key(api_key)

        try:
            validated = self.nvd_client.check_api_key(api_key)
        except NvdUpstreamError as e:
            self.logger.warning(f"Could not validate NVD API key: {e}")
            return KeyUpdateResultDTO(
                message="NVD API key saved, but NVD could not be reached to validate it",
                validated=False
            )

        if not validated:
            self.logger.warning("NVD rejected the saved API key")
            return KeyUpdateResultDTO(message="NVD API key saved, but NVD rejected it", validated=False)

        return KeyUpdateResultDTO(message="NVD API key updated successfully", validated=True)
