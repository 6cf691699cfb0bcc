import json

from typer.testing import CliRunner

from navvi import __version__
from navvi.cli.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_analyze_sample_repo(sample_repo_path, temp_workspace):
    output = temp_workspace / "report" / "analysis.json"
    result = runner.invoke(
        app,
        ["analyze", str(sample_repo_path), "--json", str(output), "--no-history", "--threshold", "5"],
    )

    assert result.exit_code == 0, result.output
    assert "Full-Stack Application" in result.output
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["metrics"]["total_files"] == 8
    assert payload["insights"]["architectural_style"] == "Full-Stack Application"


def test_analyze_missing_directory(temp_workspace):
    result = runner.invoke(app, ["analyze", str(temp_workspace / "nope"), "--no-history"])
    assert result.exit_code == 1
