# Wiz GraphQL models for cloud resources.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ._common import (
    Connection,
    _expect_dict,
    _expect_str,
    list_of_str,
    opt_bool,
    opt_int,
    opt_obj,
    opt_str,
    parse_connection,
)
from .cloud_accounts_api import CloudAccountNode

RESOURCES_QUERY = """query Resources($first: Int, $after: String, $filterBy: ResourceFilters) {
  resources(first: $first, after: $after, filterBy: $filterBy) {
    pageInfo { hasNextPage endCursor }
    nodes {
      id
      name
      type
      nativeType
      cloudPlatform
      cloudAccount { id name }
      region
      tags
      createdAt
      status
      publiclyAccessible
      hasPublicIpAddress
      isInternetFacing
      securityGroups
      issues { criticalCount highCount mediumCount lowCount }
    }
  }
}"""


@dataclass(frozen=True)
class ResourceIssueCountsNode:
    critical_count: Optional[int] = None
    high_count: Optional[int] = None
    medium_count: Optional[int] = None
    low_count: Optional[int] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "ResourceIssueCountsNode":
        raw = _expect_dict(obj, path)
        return ResourceIssueCountsNode(
            critical_count=opt_int(raw, "criticalCount", path),
            high_count=opt_int(raw, "highCount", path),
            medium_count=opt_int(raw, "mediumCount", path),
            low_count=opt_int(raw, "lowCount", path),
        )


def _parse_tags(raw: Dict[str, Any], path: str) -> Dict[str, str]:
    value = raw.get("tags")
    if value is None:
        return {}
    tags = _expect_dict(value, f"{path}.tags")
    out: Dict[str, str] = {}
    for key, tag_value in tags.items():
        out[key] = "" if tag_value is None else _expect_str(tag_value, f"{path}.tags.{key}")
    return out


@dataclass(frozen=True)
class ResourceNode:
    id: Optional[str]
    name: Optional[str]
    type: Optional[str]
    native_type: Optional[str] = None
    cloud_platform: Optional[str] = None
    cloud_account: Optional[CloudAccountNode] = None
    region: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)
    created_at: Optional[str] = None
    status: Optional[str] = None
    publicly_accessible: Optional[bool] = None
    has_public_ip_address: Optional[bool] = None
    is_internet_facing: Optional[bool] = None
    security_groups: List[str] = field(default_factory=list)
    issues: Optional[ResourceIssueCountsNode] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "ResourceNode":
        raw = _expect_dict(obj, path)
        return ResourceNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            type=opt_str(raw, "type", path),
            native_type=opt_str(raw, "nativeType", path),
            cloud_platform=opt_str(raw, "cloudPlatform", path),
            cloud_account=opt_obj(raw, "cloudAccount", path, CloudAccountNode.from_dict),
            region=opt_str(raw, "region", path),
            tags=_parse_tags(raw, path),
            created_at=opt_str(raw, "createdAt", path),
            status=opt_str(raw, "status", path),
            publicly_accessible=opt_bool(raw, "publiclyAccessible", path),
            has_public_ip_address=opt_bool(raw, "hasPublicIpAddress", path),
            is_internet_facing=opt_bool(raw, "isInternetFacing", path),
            security_groups=list_of_str(raw, "securityGroups", path),
            issues=opt_obj(raw, "issues", path, ResourceIssueCountsNode.from_dict),
        )


def parse_resources_page(data: Any) -> Connection[ResourceNode]:
    return parse_connection(data, "resources", ResourceNode.from_dict)
