from __future__ import annotations

from ...canonical_models import (
    WizConfigRule,
    WizConfigurationFailedResource,
    WizConfigurationFinding,
    WizFailedResources,
)
from ...enums import WizSeverity
from ..gen.configuration_findings_api import ConfigurationFindingNode
from ._common import _int_or_zero, _optional_str, _require_non_empty, _str_or_empty


def map_configuration_finding(finding: ConfigurationFindingNode) -> WizConfigurationFinding:
    if finding is None:
        raise ValueError("finding is required")

    finding_id = _require_non_empty(finding.id, "configurationFindings.nodes.id")
    path = f"configurationFinding[{finding_id}]"

    failed = None
    if finding.failed_resources is not None:
        failed = WizFailedResources(
            count=_int_or_zero(finding.failed_resources.count),
            resources=[
                WizConfigurationFailedResource(
                    id=_require_non_empty(res.id, f"{path}.failedResources.resources.id"),
                    name=_optional_str(res.name),
                    type=_optional_str(res.type),
                )
                for res in finding.failed_resources.resources
            ],
        )

    rule = None
    if finding.rule is not None:
        rule = WizConfigRule(
            id=_require_non_empty(finding.rule.id, f"{path}.rule.id"),
            name=_optional_str(finding.rule.name),
            category=_optional_str(finding.rule.category),
        )

    return WizConfigurationFinding(
        id=finding_id,
        title=_str_or_empty(finding.title),
        description=_optional_str(finding.description),
        severity=WizSeverity.from_wire(finding.severity),
        compliance_frameworks=list(finding.compliance_frameworks),
        failed_resources=failed,
        rule=rule,
        remediation=_optional_str(finding.remediation),
    )
