from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar, Union

E = TypeVar("E", bound="_WireEnum")


class _WireEnum(str, Enum):
    @classmethod
    def from_wire(cls: Type[E], value: Optional[str]) -> Optional[E]:
        """Case-insensitive lookup; values this client does not know map to None."""
        if not isinstance(value, str):
            return None
        cleaned = value.strip().upper()
        for member in cls:
            if member.value.upper() == cleaned:
                return member
        return None

    @classmethod
    def coerce(cls: Type[E], value: Union[str, E]) -> E:
        if isinstance(value, cls):
            return value
        member = cls.from_wire(value if isinstance(value, str) else None)
        if member is None:
            raise ValueError(f"Invalid {cls.__name__}: {value}")
        return member


class WizSeverity(_WireEnum):
    INFORMATIONAL = "INFORMATIONAL"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class WizUserType(_WireEnum):
    USER_ACCOUNT = "USER_ACCOUNT"
    SERVICE_ACCOUNT = "SERVICE_ACCOUNT"
    GROUP = "GROUP"
    ACCESS_KEY = "ACCESS_KEY"


class WizCloudProvider(_WireEnum):
    AWS = "AWS"
    AZURE = "AZURE"
    GCP = "GCP"
    ALIBABA = "ALIBABA"
    OCI = "OCI"
    KUBERNETES = "KUBERNETES"


class WizNativeType(_WireEnum):
    AAD_USER = "AADUser"
    AAD_GROUP = "AADGroup"
    AWS_IAM_USER = "AWSIamUser"


class WizGraphEntityType(_WireEnum):
    USER = "USER"
    GROUP = "GROUP"
    SERVICE = "SERVICE"
    RESOURCE = "RESOURCE"
