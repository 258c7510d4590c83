from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict, List, Optional, Tuple

from ...canonical_models import (
    WizCategory,
    WizIssueAnalytics,
    WizTechnology,
    WizUser,
    WizUserComprehensive,
)
from ...enums import WizGraphEntityType, WizNativeType
from ..gen.users_api import IssueAnalyticsNode, PrincipalNode, TechnologyNode
from ._common import (
    _bool_or_false,
    _int_or_zero,
    _optional_str,
    _require_non_empty,
    _str_or_empty,
)
from .cloud_accounts import map_cloud_account
from .projects import map_project


def _map_technology(tech: Optional[TechnologyNode]) -> Optional[WizTechnology]:
    if tech is None:
        return None
    categories = [
        WizCategory(id=_str_or_empty(cat.id), name=_str_or_empty(cat.name))
        for cat in tech.categories
    ]
    return WizTechnology(
        id=_str_or_empty(tech.id),
        name=_str_or_empty(tech.name),
        icon=_optional_str(tech.icon),
        description=_optional_str(tech.description),
        categories=categories,
    )


def _map_issue_analytics(node: Optional[IssueAnalyticsNode]) -> Optional[WizIssueAnalytics]:
    if node is None:
        return None
    return WizIssueAnalytics(
        issue_count=_int_or_zero(node.issue_count),
        informational_severity_count=_int_or_zero(node.informational_severity_count),
        low_severity_count=_int_or_zero(node.low_severity_count),
        medium_severity_count=_int_or_zero(node.medium_severity_count),
        high_severity_count=_int_or_zero(node.high_severity_count),
        critical_severity_count=_int_or_zero(node.critical_severity_count),
    )


def map_user(principal: PrincipalNode) -> WizUser:
    if principal is None:
        raise ValueError("principal is required")

    user_id = _require_non_empty(principal.id, "cloudResourcesV2.nodes.id")
    entity = principal.graph_entity

    return WizUser(
        id=user_id,
        name=_str_or_empty(principal.name),
        type=_str_or_empty(principal.type),
        native_type=_optional_str(principal.native_type),
        deleted_at=_optional_str(principal.deleted_at),
        graph_entity_id=_optional_str(entity.id) if entity else None,
        graph_entity_type=_optional_str(entity.type) if entity else None,
        graph_entity_properties=dict(entity.properties) if entity else {},
        has_access_to_sensitive_data=_bool_or_false(principal.has_access_to_sensitive_data),
        has_admin_privileges=_bool_or_false(principal.has_admin_privileges),
        has_high_privileges=_bool_or_false(principal.has_high_privileges),
        has_sensitive_data=_bool_or_false(principal.has_sensitive_data),
        projects=[
            map_project(project, f"user[{user_id}].projects")
            for project in principal.projects
        ],
        technology=_map_technology(principal.technology),
        cloud_account=(
            map_cloud_account(principal.cloud_account, f"user[{user_id}].cloudAccount")
            if principal.cloud_account is not None
            else None
        ),
        issue_analytics=_map_issue_analytics(principal.issue_analytics),
    )


# canonical field -> graphEntity.properties key
_STRING_PROPERTIES = {
    "user_principal_name": "userPrincipalName",
    "display_name": "displayName",
    "given_name": "givenName",
    "surname": "surname",
    "email": "email",
    "mail": "mail",
    "mail_nickname": "mailNickname",
    "company": "company",
    "department": "department",
    "job_title": "jobTitle",
    "location": "location",
    "description": "description",
    "status": "status",
    "user_type": "userType",
    "inactive_timeframe": "inactiveTimeframe",
    "user_directory": "userDirectory",
    "premises_distinguished_name": "premisesDistinguishedName",
    "aad_on_premises_domain_name": "aadOnPremisesDomainName",
    "aad_on_premises_sam_account_name": "aadOnPremisesSamAccountName",
    "home_directory": "homeDirectory",
    "shell_path": "shellPath",
    "credential_id": "credentialId",
    "credential_type": "credentialType",
    "valid_after": "validAfter",
    "valid_before": "validBefore",
    "rotated_at": "rotatedAt",
    "last_password_change": "lastPasswordChange",
    "client_id": "clientId",
    "aad_app_id": "aad_appId",
    "aad_app_owner_tenant_id": "aad_appOwnerTenantId",
    "aad_object_id": "aad_objectId",
    "aad_publisher_name": "aad_publisherName",
    "aad_sign_in_audience": "aad_signInAudience",
    "kubernetes_cluster_external_id": "kubernetes_clusterExternalId",
    "kubernetes_cluster_name": "kubernetes_clusterName",
    "kubernetes_flavor": "kubernetes_kubernetesFlavor",
    "namespace": "namespace",
    "external_id": "externalId",
    "provider_unique_id": "providerUniqueId",
    "full_resource_name": "fullResourceName",
    "cloud_provider_url": "cloudProviderURL",
    "region": "region",
    "subscription_external_id": "subscriptionExternalId",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
    "directory_last_sync_time": "directoryLastSyncTime",
    "vertex_id": "_vertexID",
}

_BOOL_PROPERTIES = {
    "account_enabled": "accountEnabled",
    "active": "active",
    "enabled": "enabled",
    "has_mfa": "hasMfa",
    "inactive_in_last_90_days": "inactiveInLast90Days",
    "ever_used": "everUsed",
    "managed": "managed",
}

_LIST_PROPERTIES = {
    "other_mails": "otherMails",
    "proxy_addresses": "proxyAddresses",
    "product_ids": "_productIDs",
}


def _property_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return _optional_str(value)
    return str(value)


def _property_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
    return None


def _property_list(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]
    cleaned = _optional_str(value)
    return [cleaned] if cleaned else []


def _smtp_addresses(proxy_addresses: List[str]) -> Tuple[List[str], Optional[str]]:
    """Email addresses from ``smtp:`` proxy entries; upper-case ``SMTP:`` marks the primary."""
    addresses: List[str] = []
    seen = set()
    primary = None
    for entry in proxy_addresses:
        prefix, sep, address = entry.partition(":")
        if not sep or prefix.lower() != "smtp" or not address:
            continue
        if prefix == "SMTP":
            primary = address
        if address.lower() not in seen:
            seen.add(address.lower())
            addresses.append(address)
    return addresses, primary


def map_user_comprehensive(user: WizUser) -> WizUserComprehensive:
    if user is None:
        raise ValueError("user is required")

    props = user.graph_entity_properties or {}
    extracted: Dict[str, Any] = {}
    for name, key in _STRING_PROPERTIES.items():
        extracted[name] = _property_str(props.get(key))
    for name, key in _BOOL_PROPERTIES.items():
        extracted[name] = _property_bool(props.get(key))
    for name, key in _LIST_PROPERTIES.items():
        extracted[name] = _property_list(props.get(key))

    email_addresses, primary = _smtp_addresses(extracted["proxy_addresses"])
    base = {f.name: getattr(user, f.name) for f in fields(WizUser)}

    return WizUserComprehensive(
        **base,
        **extracted,
        native_kind=WizNativeType.from_wire(user.native_type),
        graph_entity_kind=WizGraphEntityType.from_wire(user.graph_entity_type),
        email_addresses=email_addresses,
        primary_smtp_address=primary,
        project_names=[project.name for project in user.projects],
    )
