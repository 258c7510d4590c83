from __future__ import annotations

from ...canonical_models import WizCloudAccount
from ..gen.cloud_accounts_api import CloudAccountNode
from ._common import _optional_str, _require_non_empty, _str_or_empty


def map_cloud_account(account: CloudAccountNode, path: str = "cloudAccount") -> WizCloudAccount:
    if account is None:
        raise ValueError("account is required")

    return WizCloudAccount(
        id=_require_non_empty(account.id, f"{path}.id"),
        name=_str_or_empty(account.name),
        cloud_provider=_optional_str(account.cloud_provider),
        external_id=_optional_str(account.external_id),
    )
