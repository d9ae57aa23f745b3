"""CLI tests for the vwl command."""

import json
from pathlib import Path
from typing import Callable, Dict

import pytest
from click.testing import CliRunner

from vanilla_web_lint import __version__
from vanilla_web_lint.cli import app
from vanilla_web_lint.cli.utils.helpers import ExitCode
from vanilla_web_lint.config_paths import USER_CONFIG_FILENAME, get_default_config_path, get_user_config_dir

MakeProject = Callable[[Dict[str, str]], Path]

GOOD_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><link rel="stylesheet" href="css/main.css"></head>
<body>
  <nav class="menu"><a class="menu__link" href="/">Home</a></nav>
  <script src="js/app.js"></script>
</body>
</html>
"""

BAD_PAGE = """<!DOCTYPE html>
<html lang="en">
<body>
  <div class="nav"><a href="/">Home</a><a href="/about">About</a></div>
  <p class="introText">Hi</p>
</body>
</html>
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def clean_project(make_project: MakeProject) -> Path:
    return make_project(
        {
            "index.html": GOOD_PAGE,
            "css/main.css": ".menu__link { color: navy; }\n",
            "js/app.js": "const ready = document.readyState === 'complete';\n",
        }
    )


class TestGlobalOptions:
    """Test options of the root command."""

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.strip() == f"vwl version: {__version__}"

    def test_help_lists_commands(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("check", "rules", "config"):
            assert command in result.output

    def test_unknown_format(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "xml", "rules", "list"])
        assert result.exit_code == ExitCode.INVALID_USAGE


class TestCheckCommand:
    """Test `vwl check`."""

    def test_clean_project_passes(self, cli_runner: CliRunner, clean_project: Path) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "check"])
        assert result.exit_code == ExitCode.SUCCESS, result.output
        data = json.loads(result.output)
        assert data["violations"] == []
        assert data["passed"] is True
        assert data["files"] == ["css/main.css", "index.html", "js/app.js"]
        assert data["summary"]["files"] == 3

    def test_violations_fail_the_run(self, cli_runner: CliRunner, make_project: MakeProject) -> None:
        make_project({"index.html": BAD_PAGE})
        result = cli_runner.invoke(app, ["--format", "json", "check", "index.html"])
        assert result.exit_code == ExitCode.VIOLATIONS_FOUND
        data = json.loads(result.output)
        rules = {v["rule"]: v for v in data["violations"]}
        assert rules["semantic-nav"]["line"] == 4
        assert rules["semantic-nav"]["severity"] == "error"
        assert rules["bem-class-name"]["severity"] == "warning"
        assert data["by_rule"] == {"bem-class-name": 1, "semantic-nav": 1}
        assert data["passed"] is False

    def test_warnings_pass_by_default(self, cli_runner: CliRunner, make_project: MakeProject) -> None:
        make_project({"style.css": ".cardTitle { top: 0; }\n"})
        result = cli_runner.invoke(app, ["--format", "json", "check", "style.css"])
        assert result.exit_code == ExitCode.SUCCESS
        assert json.loads(result.output)["summary"]["warnings"] == 1

    def test_fail_on_warning(self, cli_runner: CliRunner, make_project: MakeProject) -> None:
        make_project({"style.css": ".cardTitle { top: 0; }\n"})
        result = cli_runner.invoke(app, ["--format", "json", "check", "--fail-on", "warning", "style.css"])
        assert result.exit_code == ExitCode.VIOLATIONS_FOUND
        assert json.loads(result.output)["fail_on"] == "warning"

    def test_fail_on_from_project_config(self, cli_runner: CliRunner, make_project: MakeProject) -> None:
        make_project({"style.css": ".cardTitle { top: 0; }\n", ".vanilla-web-lint.yml": "fail_on: warning\n"})
        result = cli_runner.invoke(app, ["--format", "json", "check", "style.css"])
        assert result.exit_code == ExitCode.VIOLATIONS_FOUND

    def test_rule_selection(self, cli_runner: CliRunner, make_project: MakeProject) -> None:
        make_project({"index.html": BAD_PAGE})
        result = cli_runner.invoke(app, ["--format", "json", "check", "--rule", "bem-class-name", "index.html"])
        assert result.exit_code == ExitCode.SUCCESS
        assert [v["rule"] for v in json.loads(result.output)["violations"]] == ["bem-class-name"]

        result = cli_runner.invoke(app, ["--format", "json", "check", "--disable", "semantic-nav", "index.html"])
        assert result.exit_code == ExitCode.SUCCESS
        assert [v["rule"] for v in json.loads(result.output)["violations"]] == ["bem-class-name"]

    def test_unknown_rule_selection(self, cli_runner: CliRunner, clean_project: Path) -> None:
        result = cli_runner.invoke(app, ["check", "--rule", "no-tabs"])
        assert result.exit_code == ExitCode.RULE_NOT_FOUND
        assert "Unknown rule 'no-tabs'" in result.output
        assert "Available rules:" in result.output

    def test_csv_output(self, cli_runner: CliRunner, make_project: MakeProject) -> None:
        make_project({"app.js": "var a = 1;\n"})
        result = cli_runner.invoke(app, ["--format", "csv", "check", "app.js"])
        assert result.exit_code == ExitCode.VIOLATIONS_FOUND
        lines = result.output.strip().splitlines()
        assert lines[0] == "path,line,column,severity,rule,message"
        assert lines[1] == "app.js,1,1,error,no-var,Use 'let' or 'const' instead of 'var'"

    def test_table_output(self, cli_runner: CliRunner, make_project: MakeProject) -> None:
        make_project({"app.js": "var a = 1;\n"})
        result = cli_runner.invoke(app, ["--format", "table", "--no-color", "check", "app.js"])
        assert result.exit_code == ExitCode.VIOLATIONS_FOUND
        assert "app.js" in result.output
        assert "no-var" in result.output
        assert "Failed" in result.output

    def test_table_output_clean(self, cli_runner: CliRunner, clean_project: Path) -> None:
        result = cli_runner.invoke(app, ["--format", "table", "check", "."])
        assert result.exit_code == ExitCode.SUCCESS
        assert "No problems found" in result.output

    def test_missing_path(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "check", "missing.html"])
        assert result.exit_code == ExitCode.VIOLATIONS_FOUND
        assert json.loads(result.output)["violations"][0]["rule"] == "parse-error"

    def test_explicit_config_missing(self, cli_runner: CliRunner, clean_project: Path) -> None:
        result = cli_runner.invoke(app, ["--config", "nope.yml", "check"])
        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Error: Config file not found" in result.output

    def test_invalid_config(self, cli_runner: CliRunner, make_project: MakeProject) -> None:
        make_project({".vanilla-web-lint.yml": "rules:\n  no-var: loud\n", "app.js": "let a;\n"})
        result = cli_runner.invoke(app, ["check"])
        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Rule 'no-var'" in result.output


class TestRulesCommands:
    """Test `vwl rules`."""

    def test_list_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "rules", "list"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["count"] == len(data["rules"]) == 15
        by_id = {row["id"]: row for row in data["rules"]}
        assert by_id["bem-class-name"]["severity"] == "warning"
        assert by_id["bem-class-name"]["file_types"] == ["css", "html"]
        assert by_id["file-layout"]["file_types"] == ["project"]

    def test_list_reflects_config(self, cli_runner: CliRunner, make_project: MakeProject) -> None:
        make_project({".vanilla-web-lint.yml": "rules:\n  no-var: off\n"})
        result = cli_runner.invoke(app, ["--format", "json", "rules", "list"])
        by_id = {row["id"]: row for row in json.loads(result.output)["rules"]}
        assert by_id["no-var"]["severity"] == "off"
        assert by_id["no-var"]["default_severity"] == "error"

    def test_list_csv(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "csv", "rules", "list"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0] == "id,file_types,severity,default_severity,description"
        assert lines[1].startswith("bem-class-name,css html,warning,warning,")

    def test_list_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "table", "rules", "list"])
        assert result.exit_code == 0
        assert "Lint Rules" in result.output
        assert "semantic-nav" in result.output

    def test_show_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "rules", "show", "no-important"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["id"] == "no-important"
        assert data["severity"] == "warning"
        assert data["effective_options"] == {"max_allowed": 0}
        assert "max_allowed" in data["options"]

    def test_show_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "table", "rules", "show", "strict-equality"])
        assert result.exit_code == 0
        assert "strict-equality" in result.output
        assert "allow_null" in result.output

    def test_show_unknown_rule(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["rules", "show", "no-tabs"])
        assert result.exit_code == ExitCode.RULE_NOT_FOUND
        assert "Unknown rule 'no-tabs'" in result.output


class TestConfigCommands:
    """Test `vwl config`."""

    def test_paths_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "config", "paths"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["active"]["path"] == str(get_default_config_path())
        assert len(data["config_sources"]) == len(data["resolution_order"]) == 5

    def test_paths_with_explicit_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.yml"
        config_file.write_text("{}\n", encoding="utf-8")
        result = cli_runner.invoke(app, ["--format", "json", "--config", str(config_file), "config", "paths"])
        data = json.loads(result.output)
        assert data["active"]["source"] == "CLI flag (--config)"
        assert data["active"]["exists"] is True

    def test_paths_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "table", "config", "paths"])
        assert result.exit_code == 0
        assert "Config Sources" in result.output

    def test_show_json(self, cli_runner: CliRunner, make_project: MakeProject) -> None:
        make_project({".vanilla-web-lint.yml": "ignore:\n  - legacy\nrules:\n  doctype: error\n"})
        result = cli_runner.invoke(app, ["--format", "json", "config", "show"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["source"] == "Project file"
        assert data["ignore"][-1] == "legacy"
        assert data["rules"]["doctype"]["severity"] == "error"
        assert data["rules"]["file-layout"]["options"]["styles_dir"] == "css"

    def test_show_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "table", "config", "show"])
        assert result.exit_code == 0
        assert "Fail on:" in result.output
        assert "no-var" in result.output

    def test_init_project(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--format", "json", "config", "init", "--project", "--yes"])
        assert result.exit_code == 0
        target = isolated_config / ".vanilla-web-lint.yml"
        assert json.loads(result.output) == {"path": str(target), "created": True}
        assert target.read_bytes() == get_default_config_path().read_bytes()

        result = cli_runner.invoke(app, ["--format", "json", "config", "init", "--project", "--yes"])
        assert json.loads(result.output)["created"] is False

    def test_init_user(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--format", "table", "config", "init", "--yes"])
        assert result.exit_code == 0
        assert "Created config file" in result.output
        assert (get_user_config_dir() / USER_CONFIG_FILENAME).is_file()

    def test_init_prompt_declined(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["config", "init", "--project"], input="n\n")
        assert result.exit_code == 0
        assert "cancelled" in result.output
        assert not (isolated_config / ".vanilla-web-lint.yml").exists()
