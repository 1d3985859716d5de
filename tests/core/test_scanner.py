"""Tests for deep and env-file scanning."""

from __future__ import annotations

from pathlib import Path

import pytest

from envsetter.core import ScanError, reconcile, select_vars_to_fill
from envsetter.core.scanner import (
    is_self_project,
    parse_existing_env,
    scan_codebase,
    scan_env_files_only,
)
from tests._fixtures.project_builder import ProjectBuilder


def test_deep_scan_maps_names_to_files(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "app.js": "const url = process.env.API_URL;\n",
            "src/config.py": """
                import os

                DB_PASSWORD = os.getenv("DB_PASSWORD")
                API = os.environ["API_URL"]
            """,
        }
    )

    found = project_builder.scan()

    assert found == {
        "API_URL": {"app.js", "src/config.py"},
        "DB_PASSWORD": {"src/config.py"},
    }


def test_deep_scan_skips_ignored_directories(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "index.ts": "process.env.KEPT_VAR",
            "node_modules/lib/index.js": "process.env.VENDORED_VAR",
            "dist/bundle.js": "process.env.BUILT_VAR",
            ".git/hooks/pre-commit.sh": "echo $HOOK_VAR",
        }
    )

    assert set(project_builder.scan()) == {"KEPT_VAR"}


def test_deep_scan_skips_runtime_env_files(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            ".env": "RUNTIME_ONLY=${INTERPOLATED_VAR}\n",
            ".env.local": "OTHER=$LOCAL_VAR\n",
            "docker-compose.yml": """
                services:
                  cache:
                    environment:
                      - REDIS_URL=${REDIS_URL}
            """,
        }
    )

    assert project_builder.scan() == {"REDIS_URL": {"docker-compose.yml"}}


def test_deep_scan_skips_binary_and_unlisted_files(project_builder: ProjectBuilder) -> None:
    project_builder.write_bytes("blob.js", b"\x00\x01process.env.BINARY_VAR")
    project_builder.write({"notes.md": "process.env.DOC_VAR", "main.go": 'os.Getenv("GO_VAR")'})

    assert project_builder.scan() == {"GO_VAR": {"main.go"}}


def test_deep_scan_is_deterministic(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "a.py": "os.getenv('FIRST_VAR')",
            "b/c.rb": "ENV['SECOND_VAR']",
            "b/d/e.php": "env('THIRD_VAR')",
        }
    )

    assert project_builder.scan() == project_builder.scan()


def test_deep_scan_honours_extra_ignore(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "src/app.ts": "process.env.REAL_VAR",
            "generated/client.ts": "process.env.GENERATED_VAR",
            "src/vendor.min.js": "process.env.MINIFIED_VAR",
        }
    )

    found = project_builder.scan(extra_ignore=["generated/", "*.min.js"])

    assert set(found) == {"REAL_VAR"}


def test_deep_scan_respects_depth_ceiling(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "a/b/shallow.js": "process.env.SHALLOW_VAR",
            "a/b/c/deep.js": "process.env.DEEP_VAR",
        }
    )

    assert set(project_builder.scan(max_depth=2)) == {"SHALLOW_VAR"}


def test_deep_scan_reports_progress(project_builder: ProjectBuilder) -> None:
    project_builder.write({"a.js": "process.env.ONE_VAR", "sub/b.js": "process.env.TWO_VAR"})
    seen: list[str] = []

    scan_codebase(project_builder.path(), on_file=seen.append)

    assert seen == ["a.js", "sub/b.js"]


def test_deep_scan_skips_own_sources_in_self_project(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "pyproject.toml": """
                [project]
                name = "envsetter"
            """,
            "envsetter/core.py": "os.getenv('INTERNAL_VAR')",
            "tests/test_x.py": "os.getenv('TEST_VAR')",
            "scripts/deploy.sh": "echo $DEPLOY_VAR",
        }
    )

    assert is_self_project(project_builder.path())
    assert set(project_builder.scan()) == {"DEPLOY_VAR"}


def test_is_self_project_false_for_other_projects(project_builder: ProjectBuilder) -> None:
    project_builder.write({"pyproject.toml": '[project]\nname = "something-else"\n'})
    assert not is_self_project(project_builder.path())


def test_is_self_project_tolerates_broken_toml(project_builder: ProjectBuilder) -> None:
    project_builder.write({"pyproject.toml": "[project\nname = "})
    assert not is_self_project(project_builder.path())


def test_scan_raises_for_missing_root(tmp_path: Path) -> None:
    with pytest.raises(ScanError) as excinfo:
        scan_codebase(tmp_path / "missing")
    assert "missing" in str(excinfo.value)

    with pytest.raises(ScanError):
        scan_env_files_only(tmp_path / "missing")


def test_scan_raises_for_file_root(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")
    with pytest.raises(ScanError):
        scan_codebase(target)


def test_env_file_scan_reads_only_root_env_files(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            ".env": "DATABASE_URL=postgres://localhost/db\n",
            ".env.example": "DATABASE_URL=\nREDIS_URL=\nnode_env=dev\n",
            "app.py": "os.getenv('CODE_ONLY')",
            "nested/.env": "NESTED_VAR=1\n",
        }
    )

    found = project_builder.scan(deep=False)

    assert found == {
        "DATABASE_URL": {".env", ".env.example"},
        "REDIS_URL": {".env.example"},
    }


def test_env_file_scan_without_env_files(project_builder: ProjectBuilder) -> None:
    project_builder.write({"app.py": "os.getenv('CODE_ONLY')"})
    assert project_builder.scan(deep=False) == {}


def test_deep_scan_reconciles_against_existing_env(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "app.py": """
                import os

                db = os.environ.get("DATABASE_URL")
            """,
            "docker-compose.yml": """
                services:
                  worker:
                    environment:
                      REDIS: ${REDIS_URL}
            """,
            ".env": "DATABASE_URL=postgres://localhost/db\n",
        }
    )

    found = project_builder.scan()
    existing = parse_existing_env(project_builder.path() / ".env")
    stats = reconcile(found, existing)

    assert set(found) == {"DATABASE_URL", "REDIS_URL"}
    assert (stats.total, stats.already_set, stats.missing) == (2, 1, 1)
    assert select_vars_to_fill(found, existing, "missing") == ["REDIS_URL"]
