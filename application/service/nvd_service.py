import logging
from datetime import datetime, timezone
from typing import Dict, List

from application.dtos import SearchOptionDTO, VersionDTO, VulnerabilityDTO
from core.entities import CpeName, get_severity
from core.exceptions import NvdConfigurationError, NvdUpstreamError
from core.interface import INvdClient


class NvdLookupService:
    """Use Case: shape NVD CPE/CVE data for the SBOM editor"""

    def __init__(self, nvd_client: INvdClient):
        self.nvd_client = nvd_client
        self.logger = logging.getLogger(__name__)

    def search_products(self, keyword: str) -> List[SearchOptionDTO]:
        """
        Keyword search that never fails: a missing key, an upstream error
        or an empty result all fall back to a manual-entry option.
        """
        try:
            products = self.nvd_client.search_products(keyword)
        except NvdConfigurationError:
            self.logger.warning("NVD search without API key, offering manual entry")
            return [self._manual_entry(keyword, "NVD API key not configured")]
        except NvdUpstreamError as e:
            self.logger.warning(f"NVD search failed, offering manual entry: {e}")
            return [self._manual_entry(keyword, "NVD search unavailable")]

        options = []
        for product in products:
            cpe = product.get('cpe') or {}
            cpe_name = cpe.get('cpeName')
            if not cpe_name:
                continue
            titles = cpe.get('titles') or []
            title = titles[0].get('title') if titles else None
            options.append(SearchOptionDTO(value=title or cpe_name, label=title or cpe_name, cpe=cpe_name))

        if not options:
            return [self._manual_entry(keyword)]
        return options

    def get_versions(self, cpe: str) -> List[VersionDTO]:
        products = self.nvd_client.match_products(cpe)

        versions = []
        for product in products:
            details = product.get('cpe') or {}
            parsed = CpeName.parse(details.get('cpeName', ''))
            # Products without a concrete version slot are not useful as choices
            if not parsed or not parsed.version:
                continue
            versions.append(VersionDTO(
                version=parsed.version,
                release_date=details.get('created'),
                cpe=details.get('cpeName'),
                references=[r.get('ref') for r in details.get('refs') or [] if r.get('ref')]
            ))

        if not versions:
            requested = CpeName.parse(cpe)
            versions.append(VersionDTO(
                version=(requested.version if requested else '') or 'latest',
                release_date=datetime.now(timezone.utc).isoformat(),
                cpe=cpe,
                references=[]
            ))

        return versions

    def get_vulnerabilities(self, cpe: str) -> List[VulnerabilityDTO]:
        return [self._convert_cve(entry.get('cve') or {}) for entry in self.nvd_client.get_cves(cpe)]

    def _convert_cve(self, cve: Dict) -> VulnerabilityDTO:
        metrics = cve.get('metrics') or {}
        metric = None
        for key in ('cvssMetricV31', 'cvssMetricV30', 'cvssMetricV2'):
            if metrics.get(key):
                metric = metrics[key][0]
                break

        cvss_score = 0.0
        if metric:
            cvss_score = float((metric.get('cvssData') or {}).get('baseScore') or 0.0)

        description = next(
            (d.get('value') for d in cve.get('descriptions') or [] if d.get('lang') == 'en'),
            None
        )

        return VulnerabilityDTO(
            id=cve.get('id', 'UNKNOWN'),
            description=description or 'No description available',
            severity=get_severity(cvss_score).value,
            cvss_score=cvss_score,
            published_date=cve.get('published'),
            last_modified_date=cve.get('lastModified'),
            references=[r.get('url') for r in cve.get('references') or [] if r.get('url')]
        )

    def _manual_entry(self, keyword: str, reason: str = None) -> SearchOptionDTO:
        suffix = f"Manual Entry, {reason}" if reason else "Manual Entry"
        return SearchOptionDTO(value=keyword, label=f'Use "{keyword}" ({suffix})')
