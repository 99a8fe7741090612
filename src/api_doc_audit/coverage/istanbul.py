"""Summaries of Istanbul ``coverage-final.json`` reports.

Each file entry maps statement, branch and function ids to hit counts:
``s: {id: hits}``, ``b: {id: [hits, ...]}``, ``f: {id: hits}``.
"""

import json
import logging
import math
from pathlib import Path

from pydantic import BaseModel

from api_doc_audit.config import CoverageConfig

logger = logging.getLogger(__name__)


class CoverageParseError(ValueError):
    """Raised when a coverage report cannot be read."""


class LowCoverageFile(BaseModel):
    path: str
    coverage: float


class CoverageSummary(BaseModel):
    total_files: int = 0
    total_statements: int = 0
    covered_statements: int = 0
    total_branches: int = 0
    covered_branches: int = 0
    total_functions: int = 0
    covered_functions: int = 0
    low_coverage_files: list[LowCoverageFile] = []

    @property
    def statement_pct(self) -> int:
        return _percent(self.covered_statements, self.total_statements)

    @property
    def branch_pct(self) -> int:
        return _percent(self.covered_branches, self.total_branches)

    @property
    def function_pct(self) -> int:
        return _percent(self.covered_functions, self.total_functions)


def load_coverage_report(file_path: Path) -> dict:
    """Read a JSON coverage report into a mapping."""
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CoverageParseError(f"failed to parse coverage report: {e}") from e
    if not isinstance(data, dict):
        raise CoverageParseError("coverage report must be a JSON object keyed by file path")
    return data


def analyze_coverage(data: dict, config: CoverageConfig | None = None) -> CoverageSummary:
    """Count covered statements, branches and functions across all files."""
    config = config or CoverageConfig()
    summary = CoverageSummary()

    for file_path, file_data in data.items():
        if not isinstance(file_data, dict):
            raise CoverageParseError(f"coverage entry for {file_path} is not an object")
        summary.total_files += 1

        statements = _hit_counts(file_data.get("s"), file_path)
        branches = [
            hits
            for arm_hits in _hit_counts(file_data.get("b"), file_path)
            for hits in _as_list(arm_hits, file_path)
        ]
        functions = _hit_counts(file_data.get("f"), file_path)

        file_covered = _count_covered(statements, file_path)
        summary.total_statements += len(statements)
        summary.covered_statements += file_covered
        summary.total_branches += len(branches)
        summary.covered_branches += _count_covered(branches, file_path)
        summary.total_functions += len(functions)
        summary.covered_functions += _count_covered(functions, file_path)

        if not statements:
            continue
        file_pct = file_covered * 100 / len(statements)
        if file_pct < config.low_file_threshold:
            summary.low_coverage_files.append(
                LowCoverageFile(path=file_path, coverage=math.floor(file_pct * 100 + 0.5) / 100)
            )

    logger.debug("Analyzed coverage for %d file(s)", summary.total_files)
    return summary


def coverage_rating(pct: float, config: CoverageConfig | None = None) -> str:
    config = config or CoverageConfig()
    if pct >= config.good_threshold:
        return "✅ GOOD"
    if pct >= config.fair_threshold:
        return "⚠️ FAIR"
    return "❌ POOR"


def render_coverage(summary: CoverageSummary, config: CoverageConfig | None = None) -> str:
    """Render a CoverageSummary as human-readable text."""
    config = config or CoverageConfig()
    metrics = (
        ("Statements", summary.covered_statements, summary.total_statements, summary.statement_pct),
        ("Branches", summary.covered_branches, summary.total_branches, summary.branch_pct),
        ("Functions", summary.covered_functions, summary.total_functions, summary.function_pct),
    )

    lines = ["=== TEST COVERAGE ANALYSIS ===", "", "SUMMARY:", f"- Files analyzed: {summary.total_files}"]
    lines.extend(f"- {name}: {covered}/{total} ({pct}%)" for name, covered, total, pct in metrics)
    lines += ["", "COVERAGE QUALITY:"]
    lines.extend(f"- {name}: {coverage_rating(pct, config)}" for name, _, _, pct in metrics)

    lines += ["", f"FILES WITH LOW COVERAGE (<{config.low_file_threshold:g}%):"]
    if summary.low_coverage_files:
        lines.extend(f"  - {f.path}: {f.coverage:g}%" for f in summary.low_coverage_files)
    else:
        lines.append("  No files with low coverage detected!")
    return "\n".join(lines)


def _hit_counts(section, file_path: str) -> list:
    if section is None:
        return []
    if not isinstance(section, dict):
        raise CoverageParseError(f"malformed coverage section in {file_path}")
    return list(section.values())


def _as_list(value, file_path: str) -> list:
    if not isinstance(value, list):
        raise CoverageParseError(f"branch hits in {file_path} must be arrays")
    return value


def _count_covered(hits: list, file_path: str) -> int:
    try:
        return sum(1 for h in hits if h > 0)
    except TypeError as e:
        raise CoverageParseError(f"non-numeric hit count in {file_path}") from e


def _percent(covered: int, total: int) -> int:
    if not total:
        return 0
    return int(math.floor(covered / total * 100 + 0.5))
