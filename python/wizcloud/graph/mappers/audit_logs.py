from __future__ import annotations

from ...canonical_models import WizAuditLogEntry, WizAuditResource, WizAuditUser
from ..gen.audit_logs_api import AuditLogEntryNode
from ._common import _optional_str, _require_non_empty


def map_audit_log_entry(entry: AuditLogEntryNode) -> WizAuditLogEntry:
    if entry is None:
        raise ValueError("entry is required")

    entry_id = _require_non_empty(entry.id, "auditLogs.nodes.id")
    path = f"auditLog[{entry_id}]"

    user = None
    if entry.user is not None:
        user = WizAuditUser(
            id=_require_non_empty(entry.user.id, f"{path}.user.id"),
            name=_optional_str(entry.user.name),
            email=_optional_str(entry.user.email),
        )
    resource = None
    if entry.resource is not None:
        resource = WizAuditResource(
            id=_require_non_empty(entry.resource.id, f"{path}.resource.id"),
            type=_optional_str(entry.resource.type),
            name=_optional_str(entry.resource.name),
        )

    return WizAuditLogEntry(
        id=entry_id,
        timestamp=_optional_str(entry.timestamp),
        user=user,
        action=_optional_str(entry.action),
        resource=resource,
        status=_optional_str(entry.status),
        ip_address=_optional_str(entry.ip_address),
        user_agent=_optional_str(entry.user_agent),
        details=_optional_str(entry.details),
    )
