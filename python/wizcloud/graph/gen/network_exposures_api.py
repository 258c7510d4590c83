# Wiz GraphQL models for network exposure records.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from ._common import (
    Connection,
    _expect_dict,
    list_of_int,
    list_of_str,
    opt_bool,
    opt_obj,
    opt_str,
    parse_connection,
)

NETWORK_EXPOSURES_QUERY = """query NetworkExposure($first: Int, $after: String, $filterBy: NetworkExposureFilters) {
  networkExposure(first: $first, after: $after, filterBy: $filterBy) {
    pageInfo { hasNextPage endCursor }
    nodes {
      id
      resource { id name type }
      exposureType
      ports
      protocols
      sourceIpRanges
      internetFacing
      publicIpAddress
      dnsName
      certificate { issuer expiryDate isValid }
    }
  }
}"""


@dataclass(frozen=True)
class ExposedResourceNode:
    id: Optional[str]
    name: Optional[str] = None
    type: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "ExposedResourceNode":
        raw = _expect_dict(obj, path)
        return ExposedResourceNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            type=opt_str(raw, "type", path),
        )


@dataclass(frozen=True)
class CertificateNode:
    issuer: Optional[str] = None
    expiry_date: Optional[str] = None
    is_valid: Optional[bool] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "CertificateNode":
        raw = _expect_dict(obj, path)
        return CertificateNode(
            issuer=opt_str(raw, "issuer", path),
            expiry_date=opt_str(raw, "expiryDate", path),
            is_valid=opt_bool(raw, "isValid", path),
        )


@dataclass(frozen=True)
class NetworkExposureNode:
    id: Optional[str]
    resource: Optional[ExposedResourceNode] = None
    exposure_type: Optional[str] = None
    ports: List[int] = field(default_factory=list)
    protocols: List[str] = field(default_factory=list)
    source_ip_ranges: List[str] = field(default_factory=list)
    internet_facing: Optional[bool] = None
    public_ip_address: Optional[str] = None
    dns_name: Optional[str] = None
    certificate: Optional[CertificateNode] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "NetworkExposureNode":
        raw = _expect_dict(obj, path)
        return NetworkExposureNode(
            id=opt_str(raw, "id", path),
            resource=opt_obj(raw, "resource", path, ExposedResourceNode.from_dict),
            exposure_type=opt_str(raw, "exposureType", path),
            ports=list_of_int(raw, "ports", path),
            protocols=list_of_str(raw, "protocols", path),
            source_ip_ranges=list_of_str(raw, "sourceIpRanges", path),
            internet_facing=opt_bool(raw, "internetFacing", path),
            public_ip_address=opt_str(raw, "publicIpAddress", path),
            dns_name=opt_str(raw, "dnsName", path),
            certificate=opt_obj(raw, "certificate", path, CertificateNode.from_dict),
        )


def parse_network_exposures_page(data: Any) -> Connection[NetworkExposureNode]:
    return parse_connection(data, "networkExposure", NetworkExposureNode.from_dict)
