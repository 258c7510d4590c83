import pytest

from wiz_graphql.errors import SerializationError
from wizcloud.enums import WizCloudProvider, WizGraphEntityType, WizNativeType, WizSeverity
from wizcloud.graph.gen.audit_logs_api import AuditLogEntryNode
from wizcloud.graph.gen.compliance_api import parse_compliance_posture
from wizcloud.graph.gen.configuration_findings_api import ConfigurationFindingNode
from wizcloud.graph.gen.issues_api import IssueNode
from wizcloud.graph.gen.network_exposures_api import NetworkExposureNode
from wizcloud.graph.gen.resources_api import ResourceNode
from wizcloud.graph.gen.users_api import PrincipalNode, parse_users_page
from wizcloud.graph.gen.vulnerabilities_api import VulnerabilityNode
from wizcloud.graph.mappers.audit_logs import map_audit_log_entry
from wizcloud.graph.mappers.compliance import map_compliance_result
from wizcloud.graph.mappers.configuration_findings import map_configuration_finding
from wizcloud.graph.mappers.issues import map_issue
from wizcloud.graph.mappers.network_exposures import map_network_exposure
from wizcloud.graph.mappers.resources import map_resource
from wizcloud.graph.mappers.users import map_user, map_user_comprehensive
from wizcloud.graph.mappers.vulnerabilities import map_vulnerability


def _principal_payload():
    return {
        "id": "u-1",
        "name": "alice",
        "type": "USER_ACCOUNT",
        "nativeType": "iam_user",
        "deletedAt": None,
        "graphEntity": {"id": "ge-1", "type": "USER_ACCOUNT", "properties": {"mfa": True}},
        "hasAccessToSensitiveData": True,
        "hasAdminPrivileges": False,
        "hasHighPrivileges": None,
        "hasSensitiveData": False,
        "projects": [{"id": "p-1", "name": "Prod", "slug": "prod", "isFolder": False}],
        "technology": {
            "id": "t-1",
            "icon": None,
            "name": "AWS IAM",
            "categories": [{"id": "cat-1", "name": "Identity"}],
            "description": "IAM user",
        },
        "cloudAccount": {
            "id": "ca-1",
            "name": "main",
            "cloudProvider": "AWS",
            "externalId": "123456789012",
        },
        "issueAnalytics": {
            "issueCount": 3,
            "informationalSeverityCount": 0,
            "lowSeverityCount": 1,
            "mediumSeverityCount": None,
            "highSeverityCount": 2,
            "criticalSeverityCount": 0,
        },
    }


def test_map_user_full_payload():
    user = map_user(PrincipalNode.from_dict(_principal_payload(), "node"))

    assert user.id == "u-1"
    assert user.type == "USER_ACCOUNT"
    assert user.graph_entity_id == "ge-1"
    assert user.graph_entity_properties == {"mfa": True}
    assert user.has_access_to_sensitive_data is True
    assert user.has_high_privileges is False
    assert [p.id for p in user.projects] == ["p-1"]
    assert user.technology and user.technology.categories[0].name == "Identity"
    assert user.technology.icon is None
    assert user.cloud_account and user.cloud_account.external_id == "123456789012"
    assert user.issue_analytics and user.issue_analytics.medium_severity_count == 0
    assert user.issue_analytics.high_severity_count == 2


def test_map_user_minimal_payload_defaults():
    user = map_user(PrincipalNode.from_dict({"id": "u-2", "name": None, "type": None}, "node"))
    assert user.name == ""
    assert user.projects == []
    assert user.technology is None
    assert user.cloud_account is None
    assert user.graph_entity_properties == {}


def test_map_user_requires_id():
    with pytest.raises(SerializationError, match="cloudResourcesV2.nodes.id is required"):
        map_user(PrincipalNode.from_dict({"id": " ", "name": "x", "type": "GROUP"}, "node"))


def test_map_user_rejects_none():
    with pytest.raises(ValueError):
        map_user(None)


def test_map_user_comprehensive_lifts_entity_properties():
    payload = _principal_payload()
    payload["nativeType"] = "aaduser"
    payload["graphEntity"] = {
        "id": "ge-1",
        "type": "USER",
        "properties": {
            "userPrincipalName": "alice@contoso.com",
            "displayName": " Alice Smith ",
            "accountEnabled": "True",
            "hasMfa": False,
            "everUsed": "sometimes",
            "aad_objectId": "obj-1",
            "kubernetes_clusterName": "aks-1",
            "createdAt": "2024-01-02T03:04:05Z",
            "_vertexID": 42,
            "otherMails": ["a@x.com", None, "b@x.com"],
            "_productIDs": "prod-1",
            "proxyAddresses": [
                "smtp:alias@contoso.com",
                "SMTP:alice@contoso.com",
                "x500:/o=Contoso",
                "smtp:ALIAS@contoso.com",
            ],
        },
    }
    user = map_user_comprehensive(map_user(PrincipalNode.from_dict(payload, "node")))

    assert user.id == "u-1"
    assert user.has_access_to_sensitive_data is True
    assert user.native_type == "aaduser"
    assert user.native_kind is WizNativeType.AAD_USER
    assert user.graph_entity_kind is WizGraphEntityType.USER
    assert user.user_principal_name == "alice@contoso.com"
    assert user.display_name == "Alice Smith"
    assert user.account_enabled is True
    assert user.has_mfa is False
    assert user.ever_used is None
    assert user.aad_object_id == "obj-1"
    assert user.kubernetes_cluster_name == "aks-1"
    assert user.created_at == "2024-01-02T03:04:05Z"
    assert user.vertex_id == "42"
    assert user.other_mails == ["a@x.com", "b@x.com"]
    assert user.product_ids == ["prod-1"]
    assert user.email_addresses == ["alias@contoso.com", "alice@contoso.com"]
    assert user.primary_smtp_address == "alice@contoso.com"
    assert user.project_names == ["Prod"]


def test_map_user_comprehensive_without_entity_properties():
    principal = PrincipalNode.from_dict(
        {"id": "u-2", "name": "svc", "type": "SERVICE_ACCOUNT", "nativeType": "k8s_sa"}, "node"
    )
    user = map_user_comprehensive(map_user(principal))
    assert user.native_kind is None
    assert user.graph_entity_kind is None
    assert user.email is None
    assert user.managed is None
    assert user.proxy_addresses == []
    assert user.email_addresses == []
    assert user.primary_smtp_address is None
    assert user.project_names == []


def test_map_user_comprehensive_rejects_none():
    with pytest.raises(ValueError):
        map_user_comprehensive(None)


def test_wire_model_rejects_wrong_types_with_path():
    payload = {
        "data": {
            "cloudResourcesV2": {
                "pageInfo": {"hasNextPage": False, "endCursor": None},
                "nodes": [{"id": "u-1", "hasAdminPrivileges": "yes"}],
            }
        }
    }
    with pytest.raises(SerializationError, match=r"nodes\[0\]\.hasAdminPrivileges"):
        parse_users_page(payload["data"])


def test_map_issue_parses_enums_and_nested_objects():
    issue = map_issue(
        IssueNode.from_dict(
            {
                "id": "i-1",
                "name": "Public bucket",
                "type": "CLOUD_CONFIGURATION",
                "severity": "high",
                "status": "OPEN",
                "createdAt": "2024-01-01T00:00:00Z",
                "projects": [{"id": "p-1", "name": "Prod"}],
                "resource": {
                    "id": "r-1",
                    "name": "bucket",
                    "type": "BUCKET",
                    "cloudPlatform": "AWS",
                    "region": "us-east-1",
                },
                "control": {"id": "ctl-1", "name": "No public buckets", "severity": "UNKNOWN"},
            },
            "node",
        )
    )

    assert issue.severity is WizSeverity.HIGH
    assert issue.created_at == "2024-01-01T00:00:00Z"
    assert issue.resource and issue.resource.cloud_platform is WizCloudProvider.AWS
    assert issue.control and issue.control.severity is None
    assert issue.resolved_at is None


def test_map_resource_keeps_tags_and_counts():
    resource = map_resource(
        ResourceNode.from_dict(
            {
                "id": "r-1",
                "name": "vm",
                "type": "VIRTUAL_MACHINE",
                "cloudPlatform": "Azure",
                "tags": {"env": "prod", "owner": None},
                "publiclyAccessible": True,
                "securityGroups": ["sg-1"],
                "issues": {"criticalCount": 1, "highCount": None},
            },
            "node",
        )
    )
    assert resource.cloud_platform is WizCloudProvider.AZURE
    assert resource.tags == {"env": "prod", "owner": ""}
    assert resource.publicly_accessible is True
    assert resource.has_public_ip_address is False
    assert resource.issues and resource.issues.critical_count == 1
    assert resource.issues.high_count == 0


def test_map_vulnerability():
    vuln = map_vulnerability(
        VulnerabilityNode.from_dict(
            {
                "id": "v-1",
                "name": "openssl",
                "cve": "CVE-2024-0001",
                "severity": "CRITICAL",
                "cvssScore": 9,
                "exploitAvailable": True,
                "vulnerableAsset": {"id": "a-1", "name": "web", "type": "CONTAINER_IMAGE"},
            },
            "node",
        )
    )
    assert vuln.cvss_score == 9.0
    assert vuln.severity is WizSeverity.CRITICAL
    assert vuln.asset and vuln.asset.id == "a-1"


def test_map_configuration_finding():
    finding = map_configuration_finding(
        ConfigurationFindingNode.from_dict(
            {
                "id": "f-1",
                "title": "MFA disabled",
                "severity": "MEDIUM",
                "complianceFrameworks": ["CIS", "SOC2"],
                "failedResources": {"count": 2, "resources": [{"id": "r-1"}, None]},
                "rule": {"id": "rule-1", "name": "MFA", "category": "IAM"},
            },
            "node",
        )
    )
    assert finding.compliance_frameworks == ["CIS", "SOC2"]
    assert finding.failed_resources and finding.failed_resources.count == 2
    assert [r.id for r in finding.failed_resources.resources] == ["r-1"]
    assert finding.rule and finding.rule.category == "IAM"


def test_map_network_exposure():
    exposure = map_network_exposure(
        NetworkExposureNode.from_dict(
            {
                "id": "n-1",
                "resource": {"id": "r-1", "type": "LOAD_BALANCER"},
                "ports": [443],
                "protocols": ["TCP"],
                "sourceIpRanges": ["0.0.0.0/0"],
                "internetFacing": True,
                "certificate": {"issuer": "LE", "expiryDate": "2025-01-01", "isValid": True},
            },
            "node",
        )
    )
    assert exposure.ports == [443]
    assert exposure.internet_facing is True
    assert exposure.certificate and exposure.certificate.is_valid is True


def test_map_audit_log_entry():
    entry = map_audit_log_entry(
        AuditLogEntryNode.from_dict(
            {
                "id": "e-1",
                "timestamp": "2024-01-01T00:00:00Z",
                "user": {"id": "usr", "email": "a@example.com"},
                "action": "LOGIN",
                "status": "SUCCESS",
                "ipAddress": "10.0.0.1",
            },
            "node",
        )
    )
    assert entry.user and entry.user.email == "a@example.com"
    assert entry.resource is None
    assert entry.ip_address == "10.0.0.1"


def test_map_compliance_result():
    nodes = parse_compliance_posture(
        {
            "compliancePosture": [
                {
                    "framework": "CIS",
                    "overallScore": 82.5,
                    "controls": [
                        {"id": "c-1", "severity": "LOW", "failedResourceCount": 4},
                    ],
                },
                None,
            ]
        }
    )
    result = map_compliance_result(nodes[0], 0)
    assert len(nodes) == 1
    assert result.framework == "CIS"
    assert result.overall_score == 82.5
    assert result.controls[0].severity is WizSeverity.LOW
    assert result.controls[0].passed_resource_count == 0


def test_map_compliance_result_requires_framework():
    nodes = parse_compliance_posture({"compliancePosture": [{"framework": None}]})
    with pytest.raises(SerializationError, match="compliancePosture\\[0\\].framework"):
        map_compliance_result(nodes[0], 0)
