"""CLI entry point for api-doc-audit."""

import logging
from pathlib import Path

import click

from api_doc_audit.config import CONFIG_ENVVAR, AuditConfig, ConfigError, load_config
from api_doc_audit.coverage.istanbul import (
    CoverageParseError,
    analyze_coverage,
    load_coverage_report,
    render_coverage,
)
from api_doc_audit.parser.base import DocumentParseError
from api_doc_audit.parser.loader import load_document, load_raw
from api_doc_audit.scorer.completeness import evaluate
from api_doc_audit.scorer.report import render_text, report_path_for, write_report
from api_doc_audit.validator.structure import render_validation, validate_structure

logger = logging.getLogger(__name__)

config_option = click.option(
    "--config",
    "config_path",
    default=None,
    envvar=CONFIG_ENVVAR,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help=f"YAML file overriding scoring weights and thresholds (env: {CONFIG_ENVVAR}).",
)


def _load_config(config_path: Path | None) -> AuditConfig:
    try:
        return load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """API Doc Audit: score, validate and summarize API documentation artifacts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@config_option
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON instead of text.")
@click.option("--save", is_flag=True, help="Also write the report to <name>-score.json next to the document.")
def score(doc_path: Path, config_path: Path | None, as_json: bool, save: bool):
    """Score how complete and well documented an OpenAPI document is."""
    logger.debug("Scoring %s", doc_path)
    config = _load_config(config_path)
    try:
        document = load_document(doc_path)
    except DocumentParseError as e:
        raise click.ClickException(f"Failed to parse {doc_path}: {e}") from e

    report = evaluate(document, config.scoring)
    if as_json:
        click.echo(report.model_dump_json(indent=2))
    else:
        click.echo(render_text(report, config.scoring))

    if save:
        output = report_path_for(doc_path)
        try:
            write_report(report, output)
        except OSError as e:
            raise click.ClickException(f"Failed to save report to {output}: {e}") from e
        click.echo(f"Report saved to {output}", err=True)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def validate(ctx: click.Context, doc_path: Path):
    """Check an OpenAPI/Swagger document against basic structure rules."""
    try:
        raw = load_raw(doc_path)
    except DocumentParseError as e:
        raise click.ClickException(f"Failed to parse {doc_path}: {e}") from e

    result = validate_structure(raw)
    click.echo(render_validation(result))
    if not result.is_valid:
        ctx.exit(1)


@main.command()
@click.argument("report_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@config_option
def coverage(report_path: Path, config_path: Path | None):
    """Summarize an Istanbul coverage-final.json report."""
    config = _load_config(config_path)
    try:
        summary = analyze_coverage(load_coverage_report(report_path), config.coverage)
    except CoverageParseError as e:
        raise click.ClickException(f"Coverage analysis failed: {e}") from e

    click.echo(render_coverage(summary, config.coverage))
