from __future__ import annotations

from ...canonical_models import WizVulnerability, WizVulnerableAsset
from ...enums import WizSeverity
from ..gen.vulnerabilities_api import VulnerabilityNode
from ._common import _optional_str, _require_non_empty, _str_or_empty


def map_vulnerability(vulnerability: VulnerabilityNode) -> WizVulnerability:
    if vulnerability is None:
        raise ValueError("vulnerability is required")

    vuln_id = _require_non_empty(vulnerability.id, "vulnerabilities.nodes.id")
    asset = vulnerability.vulnerable_asset

    return WizVulnerability(
        id=vuln_id,
        name=_str_or_empty(vulnerability.name),
        cve=_optional_str(vulnerability.cve),
        severity=WizSeverity.from_wire(vulnerability.severity),
        cvss_score=vulnerability.cvss_score,
        exploit_available=vulnerability.exploit_available,
        description=_optional_str(vulnerability.description),
        fixed_version=_optional_str(vulnerability.fixed_version),
        detected_at=_optional_str(vulnerability.detected_at),
        asset=(
            WizVulnerableAsset(
                id=_require_non_empty(asset.id, f"vulnerability[{vuln_id}].vulnerableAsset.id"),
                name=_optional_str(asset.name),
                type=_optional_str(asset.type),
            )
            if asset is not None
            else None
        ),
    )
