from __future__ import annotations

from typing import Optional

from ...canonical_models import WizIssue, WizIssueControl, WizIssueResource
from ...enums import WizCloudProvider, WizSeverity
from ..gen.issues_api import IssueControlNode, IssueNode, IssueResourceNode
from ._common import _optional_str, _require_non_empty, _str_or_empty
from .projects import map_project


def _map_resource(node: Optional[IssueResourceNode], path: str) -> Optional[WizIssueResource]:
    if node is None:
        return None
    return WizIssueResource(
        id=_require_non_empty(node.id, f"{path}.id"),
        name=_str_or_empty(node.name),
        type=_str_or_empty(node.type),
        cloud_platform=WizCloudProvider.from_wire(node.cloud_platform),
        region=_optional_str(node.region),
        subscription_id=_optional_str(node.subscription_id),
    )


def _map_control(node: Optional[IssueControlNode], path: str) -> Optional[WizIssueControl]:
    if node is None:
        return None
    return WizIssueControl(
        id=_require_non_empty(node.id, f"{path}.id"),
        name=_str_or_empty(node.name),
        description=_optional_str(node.description),
        severity=WizSeverity.from_wire(node.severity),
    )


def map_issue(issue: IssueNode) -> WizIssue:
    if issue is None:
        raise ValueError("issue is required")

    issue_id = _require_non_empty(issue.id, "issues.nodes.id")
    path = f"issue[{issue_id}]"

    return WizIssue(
        id=issue_id,
        name=_str_or_empty(issue.name),
        type=_str_or_empty(issue.type),
        severity=WizSeverity.from_wire(issue.severity),
        status=_optional_str(issue.status),
        created_at=_optional_str(issue.created_at),
        updated_at=_optional_str(issue.updated_at),
        resolved_at=_optional_str(issue.resolved_at),
        due_at=_optional_str(issue.due_at),
        projects=[map_project(p, f"{path}.projects") for p in issue.projects],
        resource=_map_resource(issue.resource, f"{path}.resource"),
        control=_map_control(issue.control, f"{path}.control"),
        evidence=_optional_str(issue.evidence),
        remediation=_optional_str(issue.remediation),
    )
