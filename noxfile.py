import os
from pathlib import Path
import nox

# Reuse existing virtualenvs for faster runs
nox.options.reuse_existing_virtualenvs = True
# Default sessions when running "nox"
nox.options.sessions = ["lint", "unit", "integration", "e2e"]

# Common dependencies for test sessions
COMMON_DEPS = ["-e", ".[test]"]

# Environment variables to propagate
PASSED_ENV_VARS = [
    "DATABASE_URL",
    "ENVIRONMENT",
    "LOG_LEVEL",
    "SUPERADMIN_PASSWORD",
    "VOID_WINDOW_SECONDS",
]


def _set_env(session):
    """
    Propagate database and test-related environment variables into the session.
    Also ensure the project root is on PYTHONPATH.
    """
    session.env["PYTHONPATH"] = str(Path.cwd())
    for var in PASSED_ENV_VARS:
        if var in os.environ:
            session.env[var] = os.environ[var]


@nox.session(name="lint")
def lint(session):
    """
    Code formatting, linting, and type-checks:
      - isort
      - black
      - flake8
      - mypy
    """
    _set_env(session)
    session.install("isort", "black", "flake8", "mypy")
    session.run("isort", "boothops/", "tests/")
    session.run("black", "boothops/", "tests/")
    session.run("flake8", "boothops/", "tests/")
    session.run("mypy", "boothops/")


@nox.session(name="unit")
def unit(session):
    """
    Run unit tests against in-memory SQLite.
    Usage:
      nox -s unit
      nox -s unit -- tests/unit/test_services/test_usage.py
    """
    _set_env(session)
    session.install(*COMMON_DEPS)
    tests = session.posargs or ["tests/unit"]
    htmlcov_path = ".nox/htmlcov"
    session.run(
        "pytest",
        *tests,
        "-m", "unit",
        "--maxfail=1",
        "-vv",
        "--tb=short",
        "--cov=boothops",
        "--cov-report=term-missing",
        "--cov-report=html:" + htmlcov_path,
        "--cov-report=xml",
    )


@nox.session(name="integration")
def integration(session):
    """Run the HTTP API tests through the FastAPI test client."""
    _set_env(session)
    session.install(*COMMON_DEPS)
    tests = session.posargs or ["tests/integration"]
    session.run("pytest", *tests, "--maxfail=1", "-vv", "--tb=short")


@nox.session(name="e2e")
def e2e(session):
    """
    Run the concurrency tests against a file-backed SQLite database.
    Usage:
      nox -s e2e
      nox -s e2e -- tests/e2e/test_concurrent_checkins.py
    """
    _set_env(session)
    session.install(*COMMON_DEPS)
    tests = session.posargs or ["tests/e2e"]
    session.run(
        "pytest",
        *tests,
        "--maxfail=1",
        "-vv",
        "--tb=short",
    )
