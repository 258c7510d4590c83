from __future__ import annotations

from ...canonical_models import WizComplianceControl, WizComplianceResult
from ...enums import WizSeverity
from ..gen.compliance_api import ComplianceResultNode
from ._common import _int_or_zero, _optional_str, _require_non_empty


def map_compliance_result(result: ComplianceResultNode, index: int = 0) -> WizComplianceResult:
    if result is None:
        raise ValueError("result is required")

    framework = _require_non_empty(result.framework, f"compliancePosture[{index}].framework")

    return WizComplianceResult(
        framework=framework,
        overall_score=result.overall_score,
        controls=[
            WizComplianceControl(
                id=_require_non_empty(control.id, f"compliancePosture[{index}].controls.id"),
                name=_optional_str(control.name),
                status=_optional_str(control.status),
                severity=WizSeverity.from_wire(control.severity),
                failed_resource_count=_int_or_zero(control.failed_resource_count),
                passed_resource_count=_int_or_zero(control.passed_resource_count),
            )
            for control in result.controls
        ],
        last_assessment_date=_optional_str(result.last_assessment_date),
    )
