from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .enums import WizCloudProvider, WizGraphEntityType, WizNativeType, WizSeverity


@dataclass(frozen=True)
class WizProject:
    id: str
    name: str
    slug: Optional[str] = None
    is_folder: bool = False


@dataclass(frozen=True)
class WizCloudAccount:
    id: str
    name: str
    cloud_provider: Optional[str] = None
    external_id: Optional[str] = None


@dataclass(frozen=True)
class WizCategory:
    id: str
    name: str


@dataclass(frozen=True)
class WizTechnology:
    id: str
    name: str
    icon: Optional[str] = None
    description: Optional[str] = None
    categories: List[WizCategory] = field(default_factory=list)


@dataclass(frozen=True)
class WizIssueAnalytics:
    issue_count: int = 0
    informational_severity_count: int = 0
    low_severity_count: int = 0
    medium_severity_count: int = 0
    high_severity_count: int = 0
    critical_severity_count: int = 0


@dataclass(frozen=True)
class WizUser:
    id: str
    name: str
    type: str
    native_type: Optional[str] = None
    deleted_at: Optional[str] = None
    graph_entity_id: Optional[str] = None
    graph_entity_type: Optional[str] = None
    graph_entity_properties: Dict[str, Any] = field(default_factory=dict)
    has_access_to_sensitive_data: bool = False
    has_admin_privileges: bool = False
    has_high_privileges: bool = False
    has_sensitive_data: bool = False
    projects: List[WizProject] = field(default_factory=list)
    technology: Optional[WizTechnology] = None
    cloud_account: Optional[WizCloudAccount] = None
    issue_analytics: Optional[WizIssueAnalytics] = None


@dataclass(frozen=True)
class WizUserComprehensive(WizUser):
    """WizUser with the well-known graph entity properties lifted into typed fields.

    Timestamps stay ISO strings exactly as the graph reports them.
    """

    native_kind: Optional[WizNativeType] = None
    graph_entity_kind: Optional[WizGraphEntityType] = None

    user_principal_name: Optional[str] = None
    display_name: Optional[str] = None
    given_name: Optional[str] = None
    surname: Optional[str] = None
    email: Optional[str] = None
    mail: Optional[str] = None
    mail_nickname: Optional[str] = None
    other_mails: List[str] = field(default_factory=list)
    proxy_addresses: List[str] = field(default_factory=list)
    email_addresses: List[str] = field(default_factory=list)
    primary_smtp_address: Optional[str] = None

    company: Optional[str] = None
    department: Optional[str] = None
    job_title: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    account_enabled: Optional[bool] = None
    active: Optional[bool] = None
    enabled: Optional[bool] = None
    status: Optional[str] = None
    user_type: Optional[str] = None
    has_mfa: Optional[bool] = None
    inactive_in_last_90_days: Optional[bool] = None
    inactive_timeframe: Optional[str] = None

    user_directory: Optional[str] = None
    premises_distinguished_name: Optional[str] = None
    aad_on_premises_domain_name: Optional[str] = None
    aad_on_premises_sam_account_name: Optional[str] = None
    home_directory: Optional[str] = None
    shell_path: Optional[str] = None

    credential_id: Optional[str] = None
    credential_type: Optional[str] = None
    ever_used: Optional[bool] = None
    valid_after: Optional[str] = None
    valid_before: Optional[str] = None
    rotated_at: Optional[str] = None
    last_password_change: Optional[str] = None

    client_id: Optional[str] = None
    aad_app_id: Optional[str] = None
    aad_app_owner_tenant_id: Optional[str] = None
    aad_object_id: Optional[str] = None
    aad_publisher_name: Optional[str] = None
    aad_sign_in_audience: Optional[str] = None
    managed: Optional[bool] = None

    kubernetes_cluster_external_id: Optional[str] = None
    kubernetes_cluster_name: Optional[str] = None
    kubernetes_flavor: Optional[str] = None
    namespace: Optional[str] = None

    external_id: Optional[str] = None
    provider_unique_id: Optional[str] = None
    full_resource_name: Optional[str] = None
    cloud_provider_url: Optional[str] = None
    region: Optional[str] = None
    subscription_external_id: Optional[str] = None

    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    directory_last_sync_time: Optional[str] = None

    product_ids: List[str] = field(default_factory=list)
    vertex_id: Optional[str] = None
    project_names: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class WizIssueResource:
    id: str
    name: str
    type: str
    cloud_platform: Optional[WizCloudProvider] = None
    region: Optional[str] = None
    subscription_id: Optional[str] = None


@dataclass(frozen=True)
class WizIssueControl:
    id: str
    name: str
    description: Optional[str] = None
    severity: Optional[WizSeverity] = None


@dataclass(frozen=True)
class WizIssue:
    id: str
    name: str
    type: str
    severity: Optional[WizSeverity] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    resolved_at: Optional[str] = None
    due_at: Optional[str] = None
    projects: List[WizProject] = field(default_factory=list)
    resource: Optional[WizIssueResource] = None
    control: Optional[WizIssueControl] = None
    evidence: Optional[str] = None
    remediation: Optional[str] = None


@dataclass(frozen=True)
class WizResourceIssueCounts:
    critical_count: int = 0
    high_count: int = 0
    medium_count: int = 0
    low_count: int = 0


@dataclass(frozen=True)
class WizResource:
    id: str
    name: str
    type: str
    native_type: Optional[str] = None
    cloud_platform: Optional[WizCloudProvider] = None
    cloud_account: Optional[WizCloudAccount] = None
    region: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)
    created_at: Optional[str] = None
    status: Optional[str] = None
    publicly_accessible: bool = False
    has_public_ip_address: bool = False
    is_internet_facing: bool = False
    security_groups: List[str] = field(default_factory=list)
    issues: Optional[WizResourceIssueCounts] = None


@dataclass(frozen=True)
class WizVulnerableAsset:
    id: str
    name: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class WizVulnerability:
    id: str
    name: str
    cve: Optional[str] = None
    severity: Optional[WizSeverity] = None
    cvss_score: Optional[float] = None
    exploit_available: Optional[bool] = None
    description: Optional[str] = None
    fixed_version: Optional[str] = None
    detected_at: Optional[str] = None
    asset: Optional[WizVulnerableAsset] = None


@dataclass(frozen=True)
class WizConfigurationFailedResource:
    id: str
    name: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class WizFailedResources:
    count: int = 0
    resources: List[WizConfigurationFailedResource] = field(default_factory=list)


@dataclass(frozen=True)
class WizConfigRule:
    id: str
    name: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class WizConfigurationFinding:
    id: str
    title: str
    description: Optional[str] = None
    severity: Optional[WizSeverity] = None
    compliance_frameworks: List[str] = field(default_factory=list)
    failed_resources: Optional[WizFailedResources] = None
    rule: Optional[WizConfigRule] = None
    remediation: Optional[str] = None


@dataclass(frozen=True)
class WizNetworkExposureResource:
    id: str
    name: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class WizNetworkExposureCertificate:
    issuer: Optional[str] = None
    expiry_date: Optional[str] = None
    is_valid: Optional[bool] = None


@dataclass(frozen=True)
class WizNetworkExposure:
    id: str
    resource: Optional[WizNetworkExposureResource] = None
    exposure_type: Optional[str] = None
    ports: List[int] = field(default_factory=list)
    protocols: List[str] = field(default_factory=list)
    source_ip_ranges: List[str] = field(default_factory=list)
    internet_facing: Optional[bool] = None
    public_ip_address: Optional[str] = None
    dns_name: Optional[str] = None
    certificate: Optional[WizNetworkExposureCertificate] = None


@dataclass(frozen=True)
class WizAuditUser:
    id: str
    name: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class WizAuditResource:
    id: str
    type: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class WizAuditLogEntry:
    id: str
    timestamp: Optional[str] = None
    user: Optional[WizAuditUser] = None
    action: Optional[str] = None
    resource: Optional[WizAuditResource] = None
    status: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    details: Optional[str] = None


@dataclass(frozen=True)
class WizComplianceControl:
    id: str
    name: Optional[str] = None
    status: Optional[str] = None
    severity: Optional[WizSeverity] = None
    failed_resource_count: int = 0
    passed_resource_count: int = 0


@dataclass(frozen=True)
class WizComplianceResult:
    framework: str
    overall_score: Optional[float] = None
    controls: List[WizComplianceControl] = field(default_factory=list)
    last_assessment_date: Optional[str] = None
