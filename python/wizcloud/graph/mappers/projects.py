from __future__ import annotations

from ...canonical_models import WizProject
from ..gen.projects_api import ProjectNode
from ._common import _bool_or_false, _optional_str, _require_non_empty, _str_or_empty


def map_project(project: ProjectNode, path: str = "project") -> WizProject:
    if project is None:
        raise ValueError("project is required")

    return WizProject(
        id=_require_non_empty(project.id, f"{path}.id"),
        name=_str_or_empty(project.name),
        slug=_optional_str(project.slug),
        is_folder=_bool_or_false(project.is_folder),
    )
