"""Tests for env var reference patterns."""

from __future__ import annotations

import pytest

from envsetter.core.scanner.patterns import (
    BLACKLIST,
    extract_candidates,
    has_code_extension,
    is_candidate,
    is_env_key,
)


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("const url = process.env.API_URL;", "API_URL"),
        ("process.env['DB_HOST']", "DB_HOST"),
        ('process.env["DB_PORT"]', "DB_PORT"),
        ("import.meta.env.PUBLIC_TOKEN", "PUBLIC_TOKEN"),
        ("const key = NEXT_PUBLIC_MAPS_KEY", "NEXT_PUBLIC_MAPS_KEY"),
        ("REACT_APP_TITLE", "REACT_APP_TITLE"),
        ("VITE_API_BASE", "VITE_API_BASE"),
        ("NUXT_PUBLIC_SITE", "NUXT_PUBLIC_SITE"),
        ("EXPO_PUBLIC_API", "EXPO_PUBLIC_API"),
        ('os.environ.get("SECRET_KEY")', "SECRET_KEY"),
        ("os.environ['DJANGO_DEBUG']", "DJANGO_DEBUG"),
        ("os.getenv( 'PORT_NUMBER' )", "PORT_NUMBER"),
        ('ENV["RAILS_MASTER"]', "RAILS_MASTER"),
        ('ENV.fetch("SIDEKIQ_URL")', "SIDEKIQ_URL"),
        ("env('APP_KEY')", "APP_KEY"),
        ('System.getenv("JDBC_URL")', "JDBC_URL"),
        ('os.Getenv("GIN_MODE")', "GIN_MODE"),
        ('std::env::var("RUST_LOG")', "RUST_LOG"),
        ("image: postgres:${PG_VERSION}", "PG_VERSION"),
        ("echo $DEPLOY_TARGET", "DEPLOY_TARGET"),
    ],
)
def test_extract_candidates_recognises_conventions(source: str, expected: str) -> None:
    assert expected in extract_candidates(source)


def test_extract_candidates_unions_every_pattern() -> None:
    text = "\n".join([
        "process.env.API_URL",
        "os.getenv('API_URL')",
        "${REDIS_URL}",
    ])
    assert extract_candidates(text) == {"API_URL", "REDIS_URL"}


def test_extract_candidates_drops_blacklisted_names() -> None:
    text = "process.env.NODE_ENV; echo $HOME; echo $PATH; ${SHELL}"
    assert extract_candidates(text) == set()


def test_extract_candidates_drops_short_and_lowercase_names() -> None:
    assert extract_candidates("process.env.AB; process.env.apiUrl") == set()


def test_is_candidate_and_is_env_key() -> None:
    assert "NODE_ENV" in BLACKLIST
    assert not is_candidate("NODE_ENV")
    assert not is_candidate("AB")
    assert is_candidate("API")
    assert is_env_key("DATABASE_URL")
    assert not is_env_key("database_url")
    assert not is_env_key("NODE_ENV")


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("app.py", True),
        ("index.tsx", True),
        ("docker-compose.yml", True),
        ("Dockerfile", True),
        ("Makefile", True),
        (".env.example", True),
        (".env.template", True),
        ("README.md", False),
        ("logo.png", False),
    ],
)
def test_has_code_extension(filename: str, expected: bool) -> None:
    assert has_code_extension(filename) is expected
