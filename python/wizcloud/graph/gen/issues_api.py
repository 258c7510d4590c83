# Wiz GraphQL models for security issues.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from ._common import Connection, _expect_dict, list_of, opt_obj, opt_str, parse_connection
from .projects_api import ProjectNode

ISSUES_QUERY = """query Issues($first: Int, $after: String, $filterBy: IssueFilters) {
  issues(first: $first, after: $after, filterBy: $filterBy) {
    pageInfo { hasNextPage endCursor }
    nodes {
      id
      name
      type
      severity
      status
      createdAt
      updatedAt
      resolvedAt
      dueAt
      projects { id name }
      resource { id name type cloudPlatform region subscriptionId }
      control { id name description severity }
      evidence
      remediation
    }
  }
}"""


@dataclass(frozen=True)
class IssueResourceNode:
    id: Optional[str]
    name: Optional[str]
    type: Optional[str]
    cloud_platform: Optional[str] = None
    region: Optional[str] = None
    subscription_id: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "IssueResourceNode":
        raw = _expect_dict(obj, path)
        return IssueResourceNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            type=opt_str(raw, "type", path),
            cloud_platform=opt_str(raw, "cloudPlatform", path),
            region=opt_str(raw, "region", path),
            subscription_id=opt_str(raw, "subscriptionId", path),
        )


@dataclass(frozen=True)
class IssueControlNode:
    id: Optional[str]
    name: Optional[str]
    description: Optional[str] = None
    severity: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "IssueControlNode":
        raw = _expect_dict(obj, path)
        return IssueControlNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            description=opt_str(raw, "description", path),
            severity=opt_str(raw, "severity", path),
        )


@dataclass(frozen=True)
class IssueNode:
    id: Optional[str]
    name: Optional[str]
    type: Optional[str]
    severity: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    resolved_at: Optional[str] = None
    due_at: Optional[str] = None
    projects: List[ProjectNode] = field(default_factory=list)
    resource: Optional[IssueResourceNode] = None
    control: Optional[IssueControlNode] = None
    evidence: Optional[str] = None
    remediation: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "IssueNode":
        raw = _expect_dict(obj, path)
        return IssueNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            type=opt_str(raw, "type", path),
            severity=opt_str(raw, "severity", path),
            status=opt_str(raw, "status", path),
            created_at=opt_str(raw, "createdAt", path),
            updated_at=opt_str(raw, "updatedAt", path),
            resolved_at=opt_str(raw, "resolvedAt", path),
            due_at=opt_str(raw, "dueAt", path),
            projects=list_of(raw, "projects", path, ProjectNode.from_dict),
            resource=opt_obj(raw, "resource", path, IssueResourceNode.from_dict),
            control=opt_obj(raw, "control", path, IssueControlNode.from_dict),
            evidence=opt_str(raw, "evidence", path),
            remediation=opt_str(raw, "remediation", path),
        )


def parse_issues_page(data: Any) -> Connection[IssueNode]:
    return parse_connection(data, "issues", IssueNode.from_dict)
