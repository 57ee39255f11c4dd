class SbomWorkbenchException(Exception):
    def __init__(self, message: str, error_code: str = "SBOM-GENERIC"):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class SbomValidationError(SbomWorkbenchException):
    def __init__(self, reason: str, violations: list = None):
        self.violations = violations or []
        super().__init__(reason, error_code="SBOM-VAL-001")


class SbomNotFoundError(SbomWorkbenchException):
    def __init__(self, sbom_id=None):
        self.sbom_id = sbom_id
        super().__init__("SBOM not found", error_code="SBOM-404")


class NvdConfigurationError(SbomWorkbenchException):
    def __init__(self, reason: str = "NVD API key not configured"):
        super().__init__(reason, error_code="NVD-CFG-001")


class NvdUpstreamError(SbomWorkbenchException):
    def __init__(self, endpoint: str, details: str, status_code: int = None):
        self.endpoint = endpoint
        self.status_code = status_code
        msg = f"NVD request to {endpoint} failed: {details}"
        if status_code:
            msg += f" (HTTP {status_code})"

        super().__init__(msg, error_code="NVD-UPSTREAM")
