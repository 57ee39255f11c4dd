import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_NVD_BASE_URL = "https://services.nvd.nist.gov/rest/json"


@dataclass
class AppConfig:
    """Process settings, read once at startup"""
    nvd_base_url: str = DEFAULT_NVD_BASE_URL
    nvd_timeout: float = 10.0
    nvd_api_key: Optional[str] = None
    env_file: str = ".env"
    database_url: Optional[str] = None
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> 'AppConfig':
        origins = os.getenv("SBOM_CORS_ORIGINS", "*")
        return cls(
            nvd_base_url=os.getenv("SBOM_NVD_BASE_URL", DEFAULT_NVD_BASE_URL),
            nvd_timeout=float(os.getenv("SBOM_NVD_TIMEOUT", "10")),
            nvd_api_key=os.getenv("NVD_API_KEY") or None,
            env_file=os.getenv("SBOM_ENV_FILE", ".env"),
            database_url=os.getenv("SBOM_DATABASE_URL") or None,
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            host=os.getenv("SBOM_HOST", "0.0.0.0"),
            port=int(os.getenv("SBOM_PORT", "5000")),
            log_level=os.getenv("SBOM_LOG_LEVEL", "INFO").upper()
        )
