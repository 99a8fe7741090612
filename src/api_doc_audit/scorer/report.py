"""Report model and text rendering for completeness scores."""

import math
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from api_doc_audit.config import ScoringConfig

BANNERS = {
    "excellent": "✅ Excellent API documentation!",
    "good": "👍 Good API documentation, a few improvements possible.",
    "fair": "⚠️ Fair API documentation, several gaps to address.",
    "poor": "❌ Poor API documentation, significant work needed.",
}


def round_half_up(value: float) -> int:
    """Round halves up (12.5 -> 13), unlike the built-in round()."""
    return int(math.floor(value + 0.5))


class OperationStats(BaseModel):
    """Operation counts gathered while walking the paths."""

    model_config = ConfigDict(frozen=True)

    total_operations: int = 0
    described_operations: int = 0
    exampled_operations: int = 0
    description_coverage: float = 0.0
    example_coverage: float = 0.0


class Report(BaseModel):
    """Outcome of scoring one document. Findings keep detection order."""

    model_config = ConfigDict(frozen=True)

    issues: list[str]
    suggestions: list[str]
    score: int
    stats: OperationStats = Field(default_factory=OperationStats)


def quality_rating(score: int, config: ScoringConfig | None = None) -> str:
    """Map a score to 'excellent', 'good', 'fair' or 'poor'."""
    config = config or ScoringConfig()
    if score >= config.excellent_threshold:
        return "excellent"
    if score >= config.good_threshold:
        return "good"
    if score >= config.fair_threshold:
        return "fair"
    return "poor"


def render_text(report: Report, config: ScoringConfig | None = None) -> str:
    """Render a report as human-readable text."""
    rating = quality_rating(report.score, config)
    lines = [
        "=== API DOCUMENTATION COMPLETENESS ===",
        "",
        f"Score: {report.score}/100 ({rating})",
    ]
    if report.stats.total_operations:
        lines.append(
            f"Operations: {report.stats.total_operations} "
            f"({round_half_up(report.stats.description_coverage)}% described, "
            f"{round_half_up(report.stats.example_coverage)}% with examples)"
        )
    lines.append("")

    lines.extend(_render_findings("Issues", report.issues))
    lines.extend(_render_findings("Suggestions", report.suggestions))
    lines.append(BANNERS[rating])
    return "\n".join(lines)


def _render_findings(title: str, findings: list[str]) -> list[str]:
    if not findings:
        return [f"{title}: none", ""]
    lines = [f"{title} ({len(findings)}):"]
    lines.extend(f"  {i}. {finding}" for i, finding in enumerate(findings, 1))
    lines.append("")
    return lines


def report_path_for(doc_path: Path) -> Path:
    """Sibling file the report is saved to, e.g. api.yaml -> api-score.json."""
    return doc_path.with_name(f"{doc_path.stem}-score.json")


def write_report(report: Report, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.model_dump_json(indent=2), encoding="utf-8")
