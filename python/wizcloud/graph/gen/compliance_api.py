# Wiz GraphQL models for compliance posture. The posture query returns a plain
# list, not a connection.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from ._common import (
    _expect_dict,
    _expect_list,
    list_of,
    opt_int,
    opt_number,
    opt_str,
)

COMPLIANCE_POSTURE_QUERY = """query CompliancePosture($frameworks: [String!]) {
  compliancePosture(frameworks: $frameworks) {
    framework
    overallScore
    lastAssessmentDate
    controls {
      id
      name
      status
      severity
      failedResourceCount
      passedResourceCount
    }
  }
}"""


@dataclass(frozen=True)
class ComplianceControlNode:
    id: Optional[str]
    name: Optional[str] = None
    status: Optional[str] = None
    severity: Optional[str] = None
    failed_resource_count: Optional[int] = None
    passed_resource_count: Optional[int] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "ComplianceControlNode":
        raw = _expect_dict(obj, path)
        return ComplianceControlNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            status=opt_str(raw, "status", path),
            severity=opt_str(raw, "severity", path),
            failed_resource_count=opt_int(raw, "failedResourceCount", path),
            passed_resource_count=opt_int(raw, "passedResourceCount", path),
        )


@dataclass(frozen=True)
class ComplianceResultNode:
    framework: Optional[str]
    overall_score: Optional[float] = None
    last_assessment_date: Optional[str] = None
    controls: List[ComplianceControlNode] = field(default_factory=list)

    @staticmethod
    def from_dict(obj: Any, path: str) -> "ComplianceResultNode":
        raw = _expect_dict(obj, path)
        return ComplianceResultNode(
            framework=opt_str(raw, "framework", path),
            overall_score=opt_number(raw, "overallScore", path),
            last_assessment_date=opt_str(raw, "lastAssessmentDate", path),
            controls=list_of(raw, "controls", path, ComplianceControlNode.from_dict),
        )


def parse_compliance_posture(data: Any) -> List[ComplianceResultNode]:
    root = _expect_dict(data, "data")
    value = root.get("compliancePosture")
    if value is None:
        return []
    out: List[ComplianceResultNode] = []
    for idx, item in enumerate(_expect_list(value, "data.compliancePosture")):
        if item is None:
            continue
        out.append(ComplianceResultNode.from_dict(item, f"data.compliancePosture[{idx}]"))
    return out
