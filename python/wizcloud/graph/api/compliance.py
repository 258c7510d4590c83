from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from wiz_graphql.client import GraphQLClient

from ...canonical_models import WizComplianceResult
from ...cursors import CancellationToken, Page
from ...filters import clean_list
from ...pagination import ErrorSink, iter_lazy
from ..gen import compliance_api as api
from ..mappers.compliance import map_compliance_result
from ._query import run_query


def _posture(
    client: GraphQLClient,
    frameworks: List[str],
    min_score: Optional[float],
) -> List[WizComplianceResult]:
    nodes = run_query(
        client,
        api.COMPLIANCE_POSTURE_QUERY,
        variables={"frameworks": frameworks or None},
        operation_name="CompliancePosture",
        parse=api.parse_compliance_posture,
    )
    results = [map_compliance_result(node, idx) for idx, node in enumerate(nodes)]
    if min_score is None:
        return results
    return [r for r in results if (r.overall_score or 0.0) >= min_score]


def list_compliance_posture(
    client: GraphQLClient,
    *,
    frameworks: Optional[Sequence[str]] = None,
    min_score: Optional[float] = None,
) -> List[WizComplianceResult]:
    """Posture per framework; ``min_score`` is applied client-side."""
    return _posture(client, clean_list(frameworks, "frameworks"), min_score)


def iter_compliance_posture(
    client: GraphQLClient,
    *,
    frameworks: Optional[Sequence[str]] = None,
    min_score: Optional[float] = None,
    max_results: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
    on_error: Optional[ErrorSink] = None,
) -> Iterator[WizComplianceResult]:
    framework_values = clean_list(frameworks, "frameworks")

    def fetch_page(after: Optional[str]) -> Page[WizComplianceResult]:
        return Page(items=_posture(client, framework_values, min_score))

    return iter_lazy(
        fetch_page,
        max_results=max_results,
        cancellation=cancellation,
        on_error=on_error,
        path="compliancePosture",
    )
