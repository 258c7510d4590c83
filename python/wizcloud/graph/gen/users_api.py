# Wiz GraphQL models for cloud identity principals (users, service accounts,
# groups, access keys) served by the cloudResourcesV2 connection.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from wiz_graphql.errors import SerializationError

from ._common import (
    Connection,
    _expect_dict,
    _expect_int,
    list_of,
    opt_bool,
    opt_int,
    opt_obj,
    opt_str,
    parse_connection,
)
from .cloud_accounts_api import CloudAccountNode
from .projects_api import ProjectNode

USERS_QUERY = """query CloudIdentityPrincipals($first: Int, $after: String, $filterBy: CloudResourceV2Filters) {
  cloudResourcesV2(first: $first, after: $after, filterBy: $filterBy) {
    pageInfo { hasNextPage endCursor }
    nodes { ...PrincipalDetails }
  }
}
fragment PrincipalDetails on CloudResourceV2 {
  id name type nativeType deletedAt
  graphEntity { id type properties }
  hasAccessToSensitiveData hasAdminPrivileges hasHighPrivileges hasSensitiveData
  projects { id name slug isFolder }
  technology { id icon name categories { id name } description }
  cloudAccount { id name cloudProvider externalId }
  issueAnalytics {
    issueCount informationalSeverityCount lowSeverityCount
    mediumSeverityCount highSeverityCount criticalSeverityCount
  }
}"""

USERS_COUNT_QUERY = """query CloudIdentityPrincipalsCount($filterBy: CloudResourceV2Filters) {
  cloudResourcesV2(filterBy: $filterBy) {
    totalCount
  }
}"""


@dataclass(frozen=True)
class CategoryNode:
    id: Optional[str]
    name: Optional[str]

    @staticmethod
    def from_dict(obj: Any, path: str) -> "CategoryNode":
        raw = _expect_dict(obj, path)
        return CategoryNode(id=opt_str(raw, "id", path), name=opt_str(raw, "name", path))


@dataclass(frozen=True)
class TechnologyNode:
    id: Optional[str]
    name: Optional[str]
    icon: Optional[str] = None
    description: Optional[str] = None
    categories: List[CategoryNode] = field(default_factory=list)

    @staticmethod
    def from_dict(obj: Any, path: str) -> "TechnologyNode":
        raw = _expect_dict(obj, path)
        return TechnologyNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            icon=opt_str(raw, "icon", path),
            description=opt_str(raw, "description", path),
            categories=list_of(raw, "categories", path, CategoryNode.from_dict),
        )


@dataclass(frozen=True)
class GraphEntityNode:
    id: Optional[str]
    type: Optional[str]
    properties: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_dict(obj: Any, path: str) -> "GraphEntityNode":
        raw = _expect_dict(obj, path)
        properties = raw.get("properties")
        if properties is None:
            properties = {}
        return GraphEntityNode(
            id=opt_str(raw, "id", path),
            type=opt_str(raw, "type", path),
            properties=dict(_expect_dict(properties, f"{path}.properties")),
        )


@dataclass(frozen=True)
class IssueAnalyticsNode:
    issue_count: Optional[int] = None
    informational_severity_count: Optional[int] = None
    low_severity_count: Optional[int] = None
    medium_severity_count: Optional[int] = None
    high_severity_count: Optional[int] = None
    critical_severity_count: Optional[int] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "IssueAnalyticsNode":
        raw = _expect_dict(obj, path)
        return IssueAnalyticsNode(
            issue_count=opt_int(raw, "issueCount", path),
            informational_severity_count=opt_int(raw, "informationalSeverityCount", path),
            low_severity_count=opt_int(raw, "lowSeverityCount", path),
            medium_severity_count=opt_int(raw, "mediumSeverityCount", path),
            high_severity_count=opt_int(raw, "highSeverityCount", path),
            critical_severity_count=opt_int(raw, "criticalSeverityCount", path),
        )


@dataclass(frozen=True)
class PrincipalNode:
    id: Optional[str]
    name: Optional[str]
    type: Optional[str]
    native_type: Optional[str] = None
    deleted_at: Optional[str] = None
    graph_entity: Optional[GraphEntityNode] = None
    has_access_to_sensitive_data: Optional[bool] = None
    has_admin_privileges: Optional[bool] = None
    has_high_privileges: Optional[bool] = None
    has_sensitive_data: Optional[bool] = None
    projects: List[ProjectNode] = field(default_factory=list)
    technology: Optional[TechnologyNode] = None
    cloud_account: Optional[CloudAccountNode] = None
    issue_analytics: Optional[IssueAnalyticsNode] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "PrincipalNode":
        raw = _expect_dict(obj, path)
        return PrincipalNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            type=opt_str(raw, "type", path),
            native_type=opt_str(raw, "nativeType", path),
            deleted_at=opt_str(raw, "deletedAt", path),
            graph_entity=opt_obj(raw, "graphEntity", path, GraphEntityNode.from_dict),
            has_access_to_sensitive_data=opt_bool(raw, "hasAccessToSensitiveData", path),
            has_admin_privileges=opt_bool(raw, "hasAdminPrivileges", path),
            has_high_privileges=opt_bool(raw, "hasHighPrivileges", path),
            has_sensitive_data=opt_bool(raw, "hasSensitiveData", path),
            projects=list_of(raw, "projects", path, ProjectNode.from_dict),
            technology=opt_obj(raw, "technology", path, TechnologyNode.from_dict),
            cloud_account=opt_obj(raw, "cloudAccount", path, CloudAccountNode.from_dict),
            issue_analytics=opt_obj(raw, "issueAnalytics", path, IssueAnalyticsNode.from_dict),
        )


def parse_users_page(data: Any) -> Connection[PrincipalNode]:
    return parse_connection(data, "cloudResourcesV2", PrincipalNode.from_dict)


def parse_users_count(data: Any) -> int:
    root = _expect_dict(data, "data")
    conn = _expect_dict(root.get("cloudResourcesV2"), "data.cloudResourcesV2")
    total = conn.get("totalCount")
    if total is None:
        raise SerializationError("Missing data.cloudResourcesV2.totalCount")
    return _expect_int(total, "data.cloudResourcesV2.totalCount")
