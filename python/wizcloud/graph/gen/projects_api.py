# Wiz GraphQL models for projects.
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ._common import Connection, _expect_dict, opt_bool, opt_str, parse_connection

PROJECTS_QUERY = """query Projects($first: Int, $after: String) {
  projects(first: $first, after: $after) {
    pageInfo { hasNextPage endCursor }
    nodes { id name slug isFolder }
  }
}"""


@dataclass(frozen=True)
class ProjectNode:
    id: Optional[str]
    name: Optional[str]
    slug: Optional[str] = None
    is_folder: Optional[bool] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "ProjectNode":
        raw = _expect_dict(obj, path)
        return ProjectNode(
            id=opt_str(raw, "id", path),
            name=opt_str(raw, "name", path),
            slug=opt_str(raw, "slug", path),
            is_folder=opt_bool(raw, "isFolder", path),
        )


def parse_projects_page(data: Any) -> Connection[ProjectNode]:
    return parse_connection(data, "projects", ProjectNode.from_dict)
