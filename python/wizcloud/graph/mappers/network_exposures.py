from __future__ import annotations

from ...canonical_models import (
    WizNetworkExposure,
    WizNetworkExposureCertificate,
    WizNetworkExposureResource,
)
from ..gen.network_exposures_api import NetworkExposureNode
from ._common import _optional_str, _require_non_empty


def map_network_exposure(exposure: NetworkExposureNode) -> WizNetworkExposure:
    if exposure is None:
        raise ValueError("exposure is required")

    exposure_id = _require_non_empty(exposure.id, "networkExposure.nodes.id")
    resource = exposure.resource
    certificate = exposure.certificate

    return WizNetworkExposure(
        id=exposure_id,
        resource=(
            WizNetworkExposureResource(
                id=_require_non_empty(resource.id, f"networkExposure[{exposure_id}].resource.id"),
                name=_optional_str(resource.name),
                type=_optional_str(resource.type),
            )
            if resource is not None
            else None
        ),
        exposure_type=_optional_str(exposure.exposure_type),
        ports=list(exposure.ports),
        protocols=list(exposure.protocols),
        source_ip_ranges=list(exposure.source_ip_ranges),
        internet_facing=exposure.internet_facing,
        public_ip_address=_optional_str(exposure.public_ip_address),
        dns_name=_optional_str(exposure.dns_name),
        certificate=(
            WizNetworkExposureCertificate(
                issuer=_optional_str(certificate.issuer),
                expiry_date=_optional_str(certificate.expiry_date),
                is_valid=certificate.is_valid,
            )
            if certificate is not None
            else None
        ),
    )
