from wiz_graphql.errors import (
    AuthError,
    GraphQLError,
    GraphQLOperationError,
    PaginationError,
    RateLimitError,
    RequestError,
    SerializationError,
    TransientError,
    ValidationError,
)

from .canonical_models import (
    WizAuditLogEntry,
    WizAuditResource,
    WizAuditUser,
    WizCategory,
    WizCloudAccount,
    WizComplianceControl,
    WizComplianceResult,
    WizConfigRule,
    WizConfigurationFailedResource,
    WizConfigurationFinding,
    WizFailedResources,
    WizIssue,
    WizIssueAnalytics,
    WizIssueControl,
    WizIssueResource,
    WizNetworkExposure,
    WizNetworkExposureCertificate,
    WizNetworkExposureResource,
    WizProject,
    WizResource,
    WizResourceIssueCounts,
    WizTechnology,
    WizUser,
    WizUserComprehensive,
    WizVulnerability,
    WizVulnerableAsset,
)
from .client import WizClient
from .cursors import CancellationToken, Page
from .enums import (
    WizCloudProvider,
    WizGraphEntityType,
    WizNativeType,
    WizSeverity,
    WizUserType,
)
from .env import WizSettings, load_settings
from .graph.api.audit_logs import fetch_audit_logs_page, iter_audit_logs, list_audit_logs
from .graph.api.cloud_accounts import (
    fetch_cloud_accounts_page,
    iter_cloud_accounts,
    list_cloud_accounts,
)
from .graph.api.compliance import iter_compliance_posture, list_compliance_posture
from .graph.api.configuration_findings import (
    fetch_configuration_findings_page,
    iter_configuration_findings,
    list_configuration_findings,
)
from .graph.api.issues import fetch_issues_page, iter_issues, list_issues
from .graph.api.network_exposures import (
    fetch_network_exposures_page,
    iter_network_exposures,
    list_network_exposures,
)
from .graph.api.projects import fetch_projects_page, iter_projects, list_projects
from .graph.api.resources import fetch_resources_page, iter_resources, list_resources
from .graph.api.users import (
    count_users,
    fetch_users_page,
    iter_users,
    iter_users_with_progress,
    list_users,
)
from .graph.api.vulnerabilities import (
    fetch_vulnerabilities_page,
    iter_vulnerabilities,
    list_vulnerabilities,
)
from .graph.mappers.users import map_user_comprehensive
from .pagination import collect_all, iter_lazy
from .prefetch import PrefetchWindow, prefetched_pages
from .progress import Progress, ProgressReporter
from .regions import RegionResolver, WizRegion, get_available_regions
from .session import WizSession, session

__all__ = [
    "WizClient",
    "WizRegion",
    "RegionResolver",
    "get_available_regions",
    "WizSession",
    "session",
    "WizSettings",
    "load_settings",
    "WizSeverity",
    "WizUserType",
    "WizNativeType",
    "WizGraphEntityType",
    "WizCloudProvider",
    "Page",
    "CancellationToken",
    "Progress",
    "ProgressReporter",
    "collect_all",
    "iter_lazy",
    "PrefetchWindow",
    "prefetched_pages",
    "TransientError",
    "RateLimitError",
    "AuthError",
    "RequestError",
    "SerializationError",
    "GraphQLError",
    "GraphQLOperationError",
    "ValidationError",
    "PaginationError",
    "WizProject",
    "WizCloudAccount",
    "WizCategory",
    "WizTechnology",
    "WizIssueAnalytics",
    "WizUser",
    "WizUserComprehensive",
    "map_user_comprehensive",
    "WizIssueResource",
    "WizIssueControl",
    "WizIssue",
    "WizResourceIssueCounts",
    "WizResource",
    "WizVulnerableAsset",
    "WizVulnerability",
    "WizConfigurationFailedResource",
    "WizFailedResources",
    "WizConfigRule",
    "WizConfigurationFinding",
    "WizNetworkExposureResource",
    "WizNetworkExposureCertificate",
    "WizNetworkExposure",
    "WizAuditUser",
    "WizAuditResource",
    "WizAuditLogEntry",
    "WizComplianceControl",
    "WizComplianceResult",
    "fetch_users_page",
    "iter_users",
    "list_users",
    "count_users",
    "iter_users_with_progress",
    "fetch_projects_page",
    "iter_projects",
    "list_projects",
    "fetch_cloud_accounts_page",
    "iter_cloud_accounts",
    "list_cloud_accounts",
    "fetch_issues_page",
    "iter_issues",
    "list_issues",
    "fetch_vulnerabilities_page",
    "iter_vulnerabilities",
    "list_vulnerabilities",
    "fetch_resources_page",
    "iter_resources",
    "list_resources",
    "fetch_configuration_findings_page",
    "iter_configuration_findings",
    "list_configuration_findings",
    "fetch_network_exposures_page",
    "iter_network_exposures",
    "list_network_exposures",
    "fetch_audit_logs_page",
    "iter_audit_logs",
    "list_audit_logs",
    "iter_compliance_posture",
    "list_compliance_posture",
]
