# Wiz GraphQL models for cloud accounts (subscriptions).
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ._common import Connection, _expect_dict, opt_str, parse_connection

CLOUD_ACCOUNTS_QUERY = """query CloudAccounts($first: Int, $after: String) {
  cloudAccounts(first: $first, after: $after) {
    pageInfo { hasNextPage endCursor }
    nodes { id name cloudProvider externalId }
  }
}"""


@dataclass(frozen=True)
class CloudAccountNode:
    id: Optional[str]
    name: Optional[str]
    cloud_provider: Optional[str] = None
    external_id: Optional[str] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "CloudAccountNode":
        raw = _expect_dict(obj, path)
        return CloudAccountNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            cloud_provider=opt_str(raw, "cloudProvider", path),
            external_id=opt_str(raw, "externalId", path),
        )


def parse_cloud_accounts_page(data: Any) -> Connection[CloudAccountNode]:
    return parse_connection(data, "cloudAccounts", CloudAccountNode.from_dict)
