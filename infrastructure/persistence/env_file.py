import logging
import threading
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, set_key

from core.interface import ISettingsStore

NVD_API_KEY_NAME = "NVD_API_KEY"


class EnvFileSettingsStore(ISettingsStore):
    """
    Adapter: keeps the NVD API key in memory and mirrors it to a
    KEY=value line in a dotenv file.
    """

    def __init__(self, path: str = ".env", initial_key: Optional[str] = None,
                 key_name: str = NVD_API_KEY_NAME):
        self.path = Path(path)
        self.key_name = key_name
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        # The file wins over the process environment, as it holds the last saved key
        with self._lock:
            self._api_key = self._read_key() or initial_key or None
        self.logger.info(f"{self.key_name} status: {'present' if self._api_key else 'missing'}")

    def get_nvd_api_key(self) -> Optional[str]:
        return self._api_key

    def set_nvd_api_key(self, api_key: str) -> None:
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Replaces an existing assignment in place (spaced and `export` forms included), else appends
            set_key(str(self.path), self.key_name, api_key, quote_mode="never")
            self._api_key = api_key

        self.logger.info(f"{self.key_name} updated in {self.path}")

    def _read_key(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return dotenv_values(self.path).get(self.key_name) or None
