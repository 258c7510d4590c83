# Wiz GraphQL models for cloud configuration findings.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from ._common import (
    Connection,
    _expect_dict,
    list_of,
    list_of_str,
    opt_int,
    opt_obj,
    opt_str,
    parse_connection,
)

CONFIGURATION_FINDINGS_QUERY = """query ConfigurationFindings($first: Int, $after: String, $filterBy: ConfigurationFindingFilters) {
  configurationFindings(first: $first, after: $after, filterBy: $filterBy) {
    pageInfo { hasNextPage endCursor }
    nodes {
      id
      title
      description
      severity
      complianceFrameworks
      failedResources {
        count
        resources { id name type }
      }
      rule { id name category }
      remediation
    }
  }
}"""


@dataclass(frozen=True)
class FailedResourceNode:
    id: Optional[str]
    name: Optional[str] = None
    type: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "FailedResourceNode":
        raw = _expect_dict(obj, path)
        return FailedResourceNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            type=opt_str(raw, "type", path),
        )


@dataclass(frozen=True)
class FailedResourcesNode:
    count: Optional[int] = None
    resources: List[FailedResourceNode] = field(default_factory=list)

    @staticmethod
    def from_dict(obj: Any, path: str) -> "FailedResourcesNode":
        raw = _expect_dict(obj, path)
        return FailedResourcesNode(
            count=opt_int(raw, "count", path),
            resources=list_of(raw, "resources", path, FailedResourceNode.from_dict),
        )


@dataclass(frozen=True)
class RuleNode:
    id: Optional[str]
    name: Optional[str] = None
    category: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "RuleNode":
        raw = _expect_dict(obj, path)
        return RuleNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            category=opt_str(raw, "category", path),
        )


@dataclass(frozen=True)
class ConfigurationFindingNode:
    id: Optional[str]
    title: Optional[str]
    description: Optional[str] = None
    severity: Optional[str] = None
    compliance_frameworks: List[str] = field(default_factory=list)
    failed_resources: Optional[FailedResourcesNode] = None
    rule: Optional[RuleNode] = None
    remediation: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "ConfigurationFindingNode":
        raw = _expect_dict(obj, path)
        return ConfigurationFindingNode(
            id=opt_str(raw, "id", path),
            title=opt_str(raw, "title", path),
            description=opt_str(raw, "description", path),
            severity=opt_str(raw, "severity", path),
            compliance_frameworks=list_of_str(raw, "complianceFrameworks", path),
            failed_resources=opt_obj(raw, "failedResources", path, FailedResourcesNode.from_dict),
            rule=opt_obj(raw, "rule", path, RuleNode.from_dict),
            remediation=opt_str(raw, "remediation", path),
        )


def parse_configuration_findings_page(data: Any) -> Connection[ConfigurationFindingNode]:
    return parse_connection(data, "configurationFindings", ConfigurationFindingNode.from_dict)
