# Wiz GraphQL models for audit log entries.
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ._common import Connection, _expect_dict, opt_obj, opt_str, parse_connection

AUDIT_LOGS_QUERY = """query AuditLogs($first: Int, $after: String, $filterBy: AuditLogEntryFilters) {
  auditLogs(first: $first, after: $after, filterBy: $filterBy) {
    pageInfo { hasNextPage endCursor }
    nodes {
      id
      timestamp
      user { id name email }
      action
      resource { type id name }
      status
      ipAddress
      userAgent
      details
    }
  }
}"""


@dataclass(frozen=True)
class AuditUserNode:
    id: Optional[str]
    name: Optional[str] = None
    email: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "AuditUserNode":
        raw = _expect_dict(obj, path)
        return AuditUserNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            email=opt_str(raw, "email", path),
        )


@dataclass(frozen=True)
class AuditResourceNode:
    id: Optional[str]
    type: Optional[str] = None
    name: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "AuditResourceNode":
        raw = _expect_dict(obj, path)
        return AuditResourceNode(
            id=opt_str(raw, "id", path),
            type=opt_str(raw, "type", path),
            name=opt_str(raw, "name", path),
        )


@dataclass(frozen=True)
class AuditLogEntryNode:
    id: Optional[str]
    timestamp: Optional[str] = None
    user: Optional[AuditUserNode] = None
    action: Optional[str] = None
    resource: Optional[AuditResourceNode] = None
    status: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    details: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "AuditLogEntryNode":
        raw = _expect_dict(obj, path)
        return AuditLogEntryNode(
            id=opt_str(raw, "id", path),
            timestamp=opt_str(raw, "timestamp", path),
            user=opt_obj(raw, "user", path, AuditUserNode.from_dict),
            action=opt_str(raw, "action", path),
            resource=opt_obj(raw, "resource", path, AuditResourceNode.from_dict),
            status=opt_str(raw, "status", path),
            ip_address=opt_str(raw, "ipAddress", path),
            user_agent=opt_str(raw, "userAgent", path),
            details=opt_str(raw, "details", path),
        )


def parse_audit_logs_page(data: Any) -> Connection[AuditLogEntryNode]:
    return parse_connection(data, "auditLogs", AuditLogEntryNode.from_dict)
