# Wiz GraphQL models for vulnerability findings.
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ._common import (
    Connection,
    _expect_dict,
    opt_bool,
    opt_number,
    opt_obj,
    opt_str,
    parse_connection,
)

VULNERABILITIES_QUERY = """query Vulnerabilities($first: Int, $after: String, $filterBy: VulnerabilityFilters) {
  vulnerabilities(first: $first, after: $after, filterBy: $filterBy) {
    pageInfo { hasNextPage endCursor }
    nodes {
      id
      name
      cve
      severity
      cvssScore
      exploitAvailable
      description
      fixedVersion
      detectedAt
      vulnerableAsset { id name type }
    }
  }
}"""


@dataclass(frozen=True)
class VulnerableAssetNode:
    id: Optional[str]
    name: Optional[str] = None
    type: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "VulnerableAssetNode":
        raw = _expect_dict(obj, path)
        return VulnerableAssetNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            type=opt_str(raw, "type", path),
        )


@dataclass(frozen=True)
class VulnerabilityNode:
    id: Optional[str]
    name: Optional[str]
    cve: Optional[str] = None
    severity: Optional[str] = None
    cvss_score: Optional[float] = None
    exploit_available: Optional[bool] = None
    description: Optional[str] = None
    fixed_version: Optional[str] = None
    detected_at: Optional[str] = None
    vulnerable_asset: Optional[VulnerableAssetNode] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "VulnerabilityNode":
        raw = _expect_dict(obj, path)
        return VulnerabilityNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            cve=opt_str(raw, "cve", path),
            severity=opt_str(raw, "severity", path),
            cvss_score=opt_number(raw, "cvssScore", path),
            exploit_available=opt_bool(raw, "exploitAvailable", path),
            description=opt_str(raw, "description", path),
            fixed_version=opt_str(raw, "fixedVersion", path),
            detected_at=opt_str(raw, "detectedAt", path),
            vulnerable_asset=opt_obj(raw, "vulnerableAsset", path, VulnerableAssetNode.from_dict),
        )


def parse_vulnerabilities_page(data: Any) -> Connection[VulnerabilityNode]:
    return parse_connection(data, "vulnerabilities", VulnerabilityNode.from_dict)
