"""Completeness scoring for specification documents.

``evaluate`` walks a SpecDocument once and collects two kinds of findings:

- issues, for required elements that are missing (info, title, version,
  paths, operations), and
- suggestions, for documentation quality gaps (descriptions, examples,
  servers, tags, external docs).

The score starts at 100, loses a fixed penalty per finding, gains small
bonuses for a long API description, tags and external docs, and is
clamped to 0-100. Missing structure is never an error here: any document
that loaded into a SpecDocument can be scored.
"""

import logging

from api_doc_audit.config import ScoringConfig
from api_doc_audit.parser.base import Operation, SpecDocument, is_present
from api_doc_audit.scorer.report import OperationStats, Report, round_half_up

logger = logging.getLogger(__name__)


def evaluate(document: SpecDocument, config: ScoringConfig | None = None) -> Report:
    """Score a document and return its issues, suggestions and score."""
    config = config or ScoringConfig()
    issues: list[str] = []
    suggestions: list[str] = []

    _check_info(document, issues, suggestions)

    if not document.servers:
        suggestions.append("add server information (servers) so clients know the base URL")

    operations = [operation for _, _, operation in document.iter_operations()]
    stats = OperationStats()
    if not document.paths:
        issues.append("no paths defined")
    else:
        stats = _operation_stats(operations)
        _check_coverage(stats, config, issues, suggestions)

    _check_schemas(document, suggestions)
    _check_security_schemes(document, suggestions)

    if not document.tags:
        suggestions.append("add tags to group related operations")
    if document.external_docs is None:
        suggestions.append("add external documentation links (externalDocs)")

    _check_parameters(operations, suggestions)
    _check_responses(operations, suggestions)

    score = compute_score(document, len(issues), len(suggestions), config)
    logger.debug(
        "Scored document: %d issue(s), %d suggestion(s), score %d",
        len(issues), len(suggestions), score,
    )
    return Report(issues=issues, suggestions=suggestions, score=score, stats=stats)


def compute_score(
    document: SpecDocument,
    issue_count: int,
    suggestion_count: int,
    config: ScoringConfig | None = None,
) -> int:
    """Derive the 0-100 score from finding counts and bonus conditions."""
    config = config or ScoringConfig()
    score = 100.0
    score -= config.issue_penalty * issue_count
    score -= config.suggestion_penalty * suggestion_count

    description = document.info.description if document.info else None
    if description and len(description) > config.description_bonus_min_length:
        score += config.description_bonus
    if document.tags:
        score += config.tags_bonus
    if document.external_docs is not None:
        score += config.external_docs_bonus

    return round_half_up(min(100.0, max(0.0, score)))


def _check_info(document: SpecDocument, issues: list[str], suggestions: list[str]) -> None:
    info = document.info
    if info is None:
        issues.append("missing info object")
        return
    if not is_present(info.title):
        issues.append("missing API title (info.title)")
    if not is_present(info.version):
        issues.append("missing API version (info.version)")
    if not is_present(info.description):
        suggestions.append("add an API description (info.description)")


def _operation_stats(operations: list[Operation]) -> OperationStats:
    total = len(operations)
    described = sum(1 for op in operations if op.is_described())
    exampled = sum(1 for op in operations if op.has_response_example())
    return OperationStats(
        total_operations=total,
        described_operations=described,
        exampled_operations=exampled,
        description_coverage=described * 100 / total if total else 0.0,
        example_coverage=exampled * 100 / total if total else 0.0,
    )


def _check_coverage(
    stats: OperationStats,
    config: ScoringConfig,
    issues: list[str],
    suggestions: list[str],
) -> None:
    if stats.total_operations == 0:
        issues.append("no HTTP operations defined")

    if stats.description_coverage < config.description_coverage_threshold:
        suggestions.append(
            f"only {round_half_up(stats.description_coverage)}% of operations "
            "have a summary or description"
        )
    if stats.example_coverage < config.example_coverage_threshold:
        suggestions.append(
            f"only {round_half_up(stats.example_coverage)}% of operations "
            "have response examples"
        )


def _check_schemas(document: SpecDocument, suggestions: list[str]) -> None:
    schemas = document.components.schemas if document.components else None
    if schemas is None:
        return

    documented = [schema for schema in schemas.values() if schema is not None]
    undescribed = len(schemas) - sum(1 for schema in documented if is_present(schema.description))
    without_example = len(schemas) - sum(1 for schema in documented if schema.has_example())
    if undescribed:
        suggestions.append(f"{undescribed} schema(s) lack a description")
    if without_example:
        suggestions.append(f"{without_example} schema(s) lack an example")


def _check_security_schemes(document: SpecDocument, suggestions: list[str]) -> None:
    schemes = document.components.security_schemes if document.components else None
    if schemes is None:
        return

    for name, scheme in schemes.items():
        if scheme is None or not is_present(scheme.description):
            suggestions.append(f"security scheme '{name}' lacks a description")


def _check_parameters(operations: list[Operation], suggestions: list[str]) -> None:
    params = [param for op in operations for param in op.parameters or []]
    undescribed = sum(1 for p in params if not is_present(p.description))
    without_example = sum(1 for p in params if not p.has_example())
    if undescribed:
        suggestions.append(f"{undescribed} parameter(s) lack a description")
    if without_example:
        suggestions.append(f"{without_example} parameter(s) lack an example")


def _check_responses(operations: list[Operation], suggestions: list[str]) -> None:
    undescribed = 0
    without_content = 0
    for op in operations:
        for status, response in (op.responses or {}).items():
            if response is None or not is_present(response.description):
                undescribed += 1
            if status != "default" and (response is None or response.content is None):
                without_content += 1
    if undescribed:
        suggestions.append(f"{undescribed} response(s) lack a description")
    if without_content:
        suggestions.append(f"{without_content} response(s) lack a content definition")
