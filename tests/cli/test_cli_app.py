"""End-to-end tests for the Typer command line."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from envsetter import __version__
from envsetter.cli.app import app
from envsetter.core.writer import SEPARATOR_COMMENT
from tests._fixtures.project_builder import ProjectBuilder

runner = CliRunner()


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"envsetter v{__version__}" in result.output


def test_scan_json_reports_missing_variables(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            ".env.example": "API_URL=\nPORT_NUMBER=\n",
            ".env": "API_URL=http://localhost\n",
        }
    )

    result = runner.invoke(app, ["scan", str(project_builder.path()), "--format", "json"])

    assert result.exit_code == 1
    report = json.loads(result.stdout)
    assert report["summary"] == {"total": 2, "already_set": 1, "missing": 1}
    folder = report["folders"][0]
    assert folder["folder"] == "."
    assert folder["target"] == ".env"
    assert folder["mode"] == "env-files"
    assert folder["variables"] == [
        {"name": "API_URL", "set": True, "files": [".env", ".env.example"]},
        {"name": "PORT_NUMBER", "set": False, "files": [".env.example"]},
    ]


def test_scan_deep_json_all_set(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "app.py": "import os\nos.getenv('API_URL')\n",
            ".env": "API_URL=http://localhost\n",
        }
    )

    result = runner.invoke(app, ["scan", str(project_builder.path()), "--deep", "--format", "json"])

    assert result.exit_code == 0
    report = json.loads(result.stdout)
    assert report["folders"][0]["mode"] == "deep"
    assert report["summary"]["missing"] == 0


def test_scan_rich_output(project_builder: ProjectBuilder) -> None:
    project_builder.write({".env.example": "API_URL=\n"})

    result = runner.invoke(app, ["scan", str(project_builder.path())])

    assert result.exit_code == 1
    assert "API_URL" in result.output
    assert "missing" in result.output


def test_scan_rejects_missing_path(tmp_path) -> None:
    result = runner.invoke(app, ["scan", str(tmp_path / "nope")])
    assert result.exit_code == 1
    assert "Path does not exist" in result.output


def test_run_fills_missing_variable(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            ".env.example": "DATABASE_URL=\nREDIS_URL=\n",
            ".env": "DATABASE_URL=postgres://localhost/db\n",
        }
    )

    result = runner.invoke(
        app,
        ["run", str(project_builder.path()), "--file", ".env"],
        input="missing\nredis://localhost:6379\n",
    )

    assert result.exit_code == 0, result.output
    assert project_builder.read(".env") == (
        "DATABASE_URL=postgres://localhost/db\n"
        "\n"
        f"{SEPARATOR_COMMENT}\n"
        "REDIS_URL=redis://localhost:6379\n"
    )
    assert project_builder.read(".env.example") == "DATABASE_URL=\nREDIS_URL=\n"
    assert "Complete" in result.output


def test_run_skip_writes_nothing(project_builder: ProjectBuilder) -> None:
    project_builder.write({".env.example": "REDIS_URL=\n"})

    result = runner.invoke(
        app,
        ["run", str(project_builder.path()), "--file", ".env"],
        input="missing\nskip\n",
    )

    assert result.exit_code == 0, result.output
    assert not (project_builder.path() / ".env").exists()
    assert "No changes made" in result.output


def test_run_bulk_paste(project_builder: ProjectBuilder) -> None:
    project_builder.write({".env.example": "DATABASE_URL=\nREDIS_URL=\n"})

    result = runner.invoke(
        app,
        ["run", str(project_builder.path()), "--file", ".env"],
        input="bulk\nDATABASE_URL=postgres://db\nREDIS_URL=redis://cache\n\ny\n",
    )

    assert result.exit_code == 0, result.output
    assert project_builder.read(".env") == "DATABASE_URL=postgres://db\nREDIS_URL=redis://cache\n"


def test_run_syncs_new_keys_and_warns_about_gitignore(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "app.py": "import os\nos.getenv('DATABASE_URL')\n",
            ".env.example": "",
            ".gitignore": "node_modules/\n",
        }
    )

    result = runner.invoke(
        app,
        ["run", str(project_builder.path()), "--deep", "--file", ".env"],
        input="missing\npostgres://db\n",
    )

    assert result.exit_code == 0, result.output
    assert project_builder.read(".env") == "DATABASE_URL=postgres://db\n"
    assert project_builder.read(".env.example") == "DATABASE_URL=\n"
    assert "NOT" in result.output
    assert "Synced 1 new key" in result.output


def test_run_without_env_files_suggests_deep_scan(project_builder: ProjectBuilder) -> None:
    project_builder.write({"app.py": "import os\nos.getenv('DATABASE_URL')\n"})

    result = runner.invoke(app, ["run", str(project_builder.path())])

    assert result.exit_code == 0, result.output
    assert "--deep" in result.output
    assert "No environment variables found" in result.output


def test_run_checks_root_gitignore_for_nested_folder(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            ".gitignore": "node_modules/\n",
            "apps/api/.env.example": "API_URL=\n",
        }
    )

    result = runner.invoke(
        app,
        ["run", str(project_builder.path()), "--file", ".env"],
        input="missing\nhttp://localhost\n",
    )

    assert result.exit_code == 0, result.output
    assert project_builder.read("apps/api/.env") == "API_URL=http://localhost\n"
    assert "is NOT in .gitignore" in result.output


def test_run_nested_folder_covered_by_root_gitignore(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            ".gitignore": ".env\n",
            "apps/api/.env.example": "API_URL=\n",
        }
    )

    result = runner.invoke(
        app,
        ["run", str(project_builder.path()), "--file", ".env"],
        input="missing\nhttp://localhost\n",
    )

    assert result.exit_code == 0, result.output
    assert "NOT" not in result.output
