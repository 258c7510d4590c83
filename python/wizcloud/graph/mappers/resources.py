from __future__ import annotations

from ...canonical_models import WizResource, WizResourceIssueCounts
from ...enums import WizCloudProvider
from ..gen.resources_api import ResourceNode
from ._common import (
    _bool_or_false,
    _int_or_zero,
    _optional_str,
    _require_non_empty,
    _str_or_empty,
)
from .cloud_accounts import map_cloud_account


def map_resource(resource: ResourceNode) -> WizResource:
    if resource is None:
        raise ValueError("resource is required")

    resource_id = _require_non_empty(resource.id, "resources.nodes.id")
    counts = resource.issues

    return WizResource(
        id=resource_id,
        name=_str_or_empty(resource.name),
        type=_str_or_empty(resource.type),
        native_type=_optional_str(resource.native_type),
        cloud_platform=WizCloudProvider.from_wire(resource.cloud_platform),
        cloud_account=(
            map_cloud_account(resource.cloud_account, f"resource[{resource_id}].cloudAccount")
            if resource.cloud_account is not None
            else None
        ),
        region=_optional_str(resource.region),
        tags=dict(resource.tags),
        created_at=_optional_str(resource.created_at),
        status=_optional_str(resource.status),
        publicly_accessible=_bool_or_false(resource.publicly_accessible),
        has_public_ip_address=_bool_or_false(resource.has_public_ip_address),
        is_internet_facing=_bool_or_false(resource.is_internet_facing),
        security_groups=list(resource.security_groups),
        issues=(
            WizResourceIssueCounts(
                critical_count=_int_or_zero(counts.critical_count),
                high_count=_int_or_zero(counts.high_count),
                medium_count=_int_or_zero(counts.medium_count),
                low_count=_int_or_zero(counts.low_count),
            )
            if counts is not None
            else None
        ),
    )
