"""GraphQL ``filterBy`` builders.

Each builder returns a fresh dict holding only the predicates the caller
actually supplied, or None when nothing was supplied, so the request omits
``filterBy`` entirely. Builders run once per pagination call and the result is
reused, unmodified, for every page.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from wiz_graphql.errors import ValidationError

from .enums import WizCloudProvider, WizSeverity, WizUserType

FilterSet = Dict[str, Any]
DateLike = Union[datetime, str]


def _clean_str(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def clean_list(values: Optional[Iterable[str]], name: str) -> List[str]:
    if values is None:
        return []
    if isinstance(values, str):
        raise ValidationError(f"{name} must be a list of strings")
    cleaned: List[str] = []
    for value in values:
        item = _clean_str(value)
        if item is not None and item not in cleaned:
            cleaned.append(item)
    return cleaned


def _enum_values(values, enum_cls, name: str) -> List[str]:
    if values is None:
        return []
    if isinstance(values, (str, enum_cls)):
        values = [values]
    out: List[str] = []
    for value in values:
        try:
            member = enum_cls.coerce(value)
        except ValueError as exc:
            raise ValidationError(f"Invalid {name} value: {value}") from exc
        if member.value not in out:
            out.append(member.value)
    return out


def _project(project_id: Optional[str]) -> Optional[Dict[str, List[str]]]:
    cleaned = _clean_str(project_id)
    return {"equals": [cleaned]} if cleaned else None


def _iso(value: DateLike, name: str) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
    cleaned = _clean_str(value) if isinstance(value, str) else None
    if cleaned is None:
        raise ValidationError(f"{name} must be a datetime or ISO-8601 string")
    return cleaned


def _set(filter_by: FilterSet, key: str, predicate: Any) -> None:
    if predicate is not None:
        filter_by[key] = predicate


def user_filters(
    types: Optional[Sequence[Union[WizUserType, str]]] = None,
    project_id: Optional[str] = None,
) -> Optional[FilterSet]:
    type_values = _enum_values(types, WizUserType, "types")
    filter_by: FilterSet = {}
    if type_values:
        filter_by["type"] = (
            {"equals": type_values[0]}
            if len(type_values) == 1
            else {"equalsAnyOf": type_values}
        )
    project = _clean_str(project_id)
    if project:
        filter_by["property"] = [{"name": "projectId", "equals": [project]}]
    return filter_by or None


def issue_filters(
    severities: Optional[Sequence[Union[WizSeverity, str]]] = None,
    statuses: Optional[Sequence[str]] = None,
    project_id: Optional[str] = None,
    types: Optional[Sequence[str]] = None,
) -> Optional[FilterSet]:
    filter_by: FilterSet = {}
    severity_values = _enum_values(severities, WizSeverity, "severities")
    status_values = clean_list(statuses, "statuses")
    type_values = clean_list(types, "types")
    _set(filter_by, "severity", {"equals": severity_values} if severity_values else None)
    _set(filter_by, "status", {"equals": status_values} if status_values else None)
    _set(filter_by, "type", {"equals": type_values} if type_values else None)
    _set(filter_by, "projectId", _project(project_id))
    return filter_by or None


def vulnerability_filters(
    cve: Optional[str] = None,
    min_cvss: Optional[float] = None,
    exploit_available: Optional[bool] = None,
    project_id: Optional[str] = None,
) -> Optional[FilterSet]:
    if min_cvss is not None and not 0 <= min_cvss <= 10:
        raise ValidationError("min_cvss must be between 0 and 10")
    filter_by: FilterSet = {}
    cve_clean = _clean_str(cve)
    _set(filter_by, "cve", {"equals": [cve_clean]} if cve_clean else None)
    _set(filter_by, "cvss", {"score": {"gte": min_cvss}} if min_cvss is not None else None)
    _set(
        filter_by,
        "exploitAvailable",
        {"equals": exploit_available} if exploit_available is not None else None,
    )
    _set(filter_by, "projectId", _project(project_id))
    return filter_by or None


def resource_filters(
    types: Optional[Sequence[str]] = None,
    cloud_providers: Optional[Sequence[Union[WizCloudProvider, str]]] = None,
    region: Optional[str] = None,
    publicly_accessible: Optional[bool] = None,
    tags: Optional[Mapping[str, str]] = None,
    project_id: Optional[str] = None,
) -> Optional[FilterSet]:
    filter_by: FilterSet = {}
    type_values = clean_list(types, "types")
    provider_values = _enum_values(cloud_providers, WizCloudProvider, "cloud_providers")
    region_clean = _clean_str(region)
    _set(filter_by, "type", {"equals": type_values} if type_values else None)
    _set(filter_by, "cloudPlatform", {"equals": provider_values} if provider_values else None)
    _set(filter_by, "region", {"equals": [region_clean]} if region_clean else None)
    _set(
        filter_by,
        "publiclyAccessible",
        {"equals": publicly_accessible} if publicly_accessible is not None else None,
    )
    if tags:
        tag_filters = []
        for key, value in tags.items():
            key_clean = _clean_str(key)
            if key_clean is None:
                raise ValidationError("tag names must be non-empty")
            tag_filters.append({"name": key_clean, "equals": [value]})
        filter_by["tags"] = tag_filters
    _set(filter_by, "projectId", _project(project_id))
    return filter_by or None


def configuration_finding_filters(
    frameworks: Optional[Sequence[str]] = None,
    severities: Optional[Sequence[Union[WizSeverity, str]]] = None,
    categories: Optional[Sequence[str]] = None,
    project_id: Optional[str] = None,
) -> Optional[FilterSet]:
    filter_by: FilterSet = {}
    framework_values = clean_list(frameworks, "frameworks")
    severity_values = _enum_values(severities, WizSeverity, "severities")
    category_values = clean_list(categories, "categories")
    _set(filter_by, "framework", {"equals": framework_values} if framework_values else None)
    _set(filter_by, "severity", {"equals": severity_values} if severity_values else None)
    _set(filter_by, "category", {"equals": category_values} if category_values else None)
    _set(filter_by, "projectId", _project(project_id))
    return filter_by or None


def network_exposure_filters(
    ports: Optional[Sequence[int]] = None,
    protocols: Optional[Sequence[str]] = None,
    internet_facing: Optional[bool] = None,
    project_id: Optional[str] = None,
) -> Optional[FilterSet]:
    filter_by: FilterSet = {}
    port_values: List[int] = []
    for port in ports or []:
        if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
            raise ValidationError(f"Invalid port: {port}")
        if port not in port_values:
            port_values.append(port)
    protocol_values = clean_list(protocols, "protocols")
    _set(filter_by, "port", {"equals": port_values} if port_values else None)
    _set(filter_by, "protocol", {"equals": protocol_values} if protocol_values else None)
    _set(
        filter_by,
        "internetFacing",
        {"equals": internet_facing} if internet_facing is not None else None,
    )
    _set(filter_by, "projectId", _project(project_id))
    return filter_by or None


def audit_log_filters(
    start_date: Optional[DateLike] = None,
    end_date: Optional[DateLike] = None,
    user: Optional[str] = None,
    action: Optional[str] = None,
    status: Optional[str] = None,
) -> Optional[FilterSet]:
    if (
        isinstance(start_date, datetime)
        and isinstance(end_date, datetime)
        and (start_date.tzinfo is None) == (end_date.tzinfo is None)
        and start_date > end_date
    ):
        raise ValidationError("start_date must not be after end_date")
    filter_by: FilterSet = {}
    if start_date is not None:
        filter_by["startTime"] = _iso(start_date, "start_date")
    if end_date is not None:
        filter_by["endTime"] = _iso(end_date, "end_date")
    for key, value in (("user", user), ("action", action), ("status", status)):
        cleaned = _clean_str(value)
        _set(filter_by, key, {"equals": [cleaned]} if cleaned else None)
    return filter_by or None
