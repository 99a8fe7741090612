import json
import shutil
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from api_doc_audit.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliScore:
    def test_score_petstore(self):
        runner = CliRunner()
        result = runner.invoke(main, ["score", str(FIXTURES / "petstore.yaml")])

        assert result.exit_code == 0
        assert "Score: 91/100 (excellent)" in result.output
        assert "Suggestions (9):" in result.output

    def test_score_json(self):
        runner = CliRunner()
        result = runner.invoke(main, ["score", str(FIXTURES / "petstore.yaml"), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["score"] == 91
        assert data["issues"] == []
        assert data["stats"]["total_operations"] == 3

    def test_findings_do_not_change_exit_code(self, tmp_path):
        doc = tmp_path / "empty.json"
        doc.write_text("{}")
        runner = CliRunner()
        result = runner.invoke(main, ["score", str(doc)])

        assert result.exit_code == 0
        assert "1. missing info object" in result.output

    def test_save_writes_sibling_file(self, tmp_path):
        doc = tmp_path / "petstore.yaml"
        shutil.copy(FIXTURES / "petstore.yaml", doc)
        runner = CliRunner()
        result = runner.invoke(main, ["score", str(doc), "--save"])

        assert result.exit_code == 0
        saved = json.loads((tmp_path / "petstore-score.json").read_text(encoding="utf-8"))
        assert saved["score"] == 91

    @patch("api_doc_audit.cli.write_report", side_effect=PermissionError("read-only file system"))
    def test_save_failure_is_reported(self, mock_write):
        runner = CliRunner()
        result = runner.invoke(main, ["score", str(FIXTURES / "petstore.yaml"), "--save"])

        assert result.exit_code == 1
        assert "Failed to save report" in result.output
        assert "read-only file system" in result.output
        assert "Traceback" not in result.output

    def test_empty_yaml_keys_load_as_null(self, tmp_path):
        doc = tmp_path / "api.yaml"
        doc.write_text(
            "openapi: 3.0.0\n"
            "info:\n  title: A\n  version: \"1\"\n"
            "paths:\n  /x:\n    get:\n      summary: s\n      parameters:\n      responses:\n"
        )
        runner = CliRunner()
        result = runner.invoke(main, ["score", str(doc)])

        assert result.exit_code == 0
        assert "Issues: none" in result.output

    def test_parse_error(self, tmp_path):
        doc = tmp_path / "broken.yaml"
        doc.write_text("openapi: 3.0.0\ninfo: [unclosed\n")
        runner = CliRunner()
        result = runner.invoke(main, ["score", str(doc)])

        assert result.exit_code == 1
        assert "Failed to parse" in result.output
        assert "Score:" not in result.output

    def test_missing_argument(self):
        runner = CliRunner()
        result = runner.invoke(main, ["score"])

        assert result.exit_code != 0
        assert "Usage" in result.output

    def test_nonexistent_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["score", str(tmp_path / "nope.yaml")])

        assert result.exit_code != 0

    def test_config_option(self, tmp_path):
        config = tmp_path / "audit.yaml"
        config.write_text("scoring:\n  suggestion_penalty: 0\n")
        runner = CliRunner()
        result = runner.invoke(main, ["score", str(FIXTURES / "petstore.yaml"), "--config", str(config)])

        assert result.exit_code == 0
        assert "Score: 100/100" in result.output

    def test_config_from_env(self, tmp_path):
        config = tmp_path / "audit.yaml"
        config.write_text("scoring:\n  suggestion_penalty: 0\n")
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["score", str(FIXTURES / "petstore.yaml")],
            env={"API_DOC_AUDIT_CONFIG": str(config)},
        )

        assert result.exit_code == 0
        assert "Score: 100/100" in result.output

    def test_invalid_config(self, tmp_path):
        config = tmp_path / "audit.yaml"
        config.write_text("scoring:\n  nonsense: 1\n")
        runner = CliRunner()
        result = runner.invoke(main, ["score", str(FIXTURES / "petstore.yaml"), "--config", str(config)])

        assert result.exit_code == 1
        assert "invalid config" in result.output

    def test_verbose_flag(self):
        runner = CliRunner()
        result = runner.invoke(main, ["-v", "score", str(FIXTURES / "complete.yaml")])

        assert result.exit_code == 0
        assert "Score: 100/100 (excellent)" in result.output


class TestCliValidate:
    def test_valid_document(self):
        runner = CliRunner()
        result = runner.invoke(main, ["validate", str(FIXTURES / "complete.yaml")])

        assert result.exit_code == 0
        assert "Valid: YES" in result.output

    def test_invalid_document_exits_non_zero(self, tmp_path):
        doc = tmp_path / "api.json"
        doc.write_text(json.dumps({"openapi": "3.0.0", "paths": {"/x": {}}}))
        runner = CliRunner()
        result = runner.invoke(main, ["validate", str(doc)])

        assert result.exit_code == 1
        assert "Missing required info object" in result.output

    def test_unparseable_document(self, tmp_path):
        doc = tmp_path / "api.yaml"
        doc.write_text("just a string")
        runner = CliRunner()
        result = runner.invoke(main, ["validate", str(doc)])

        assert result.exit_code == 1
        assert "Failed to parse" in result.output


class TestCliCoverage:
    def test_coverage_report(self):
        runner = CliRunner()
        result = runner.invoke(main, ["coverage", str(FIXTURES / "coverage-final.json")])

        assert result.exit_code == 0
        assert "- Statements: 4/7 (57%)" in result.output
        assert "/app/src/utils.js: 33.33%" in result.output

    def test_coverage_with_config(self, tmp_path):
        config = tmp_path / "audit.yaml"
        config.write_text("coverage:\n  good_threshold: 50\n  fair_threshold: 40\n")
        runner = CliRunner()
        result = runner.invoke(
            main, ["coverage", str(FIXTURES / "coverage-final.json"), "--config", str(config)]
        )

        assert result.exit_code == 0
        assert "- Statements: ✅ GOOD" in result.output

    def test_malformed_report(self, tmp_path):
        report = tmp_path / "coverage.json"
        report.write_text("{oops")
        runner = CliRunner()
        result = runner.invoke(main, ["coverage", str(report)])

        assert result.exit_code == 1
        assert "Coverage analysis failed" in result.output
