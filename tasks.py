# type: ignore
import os

from invoke import task


@task
def venv(ctx):
    """Create the development environment with uv."""
    ctx.run("uv sync --all-extras")


@task
def lint(ctx):
    """
    Check style and types of the source tree.
    """
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def format(ctx):
    """Apply ruff formatting and autofixes."""
    ctx.run("ruff check --fix src tests", pty=True)
    ctx.run("ruff format src tests", pty=True)


@task
def test(ctx):
    """
    Run tests with coverage information.
    """
    ctx.run("pytest --cov=tvremote --cov-report=term-missing", pty=True)


@task
def scan(ctx, timeout=5):
    """Scan the local network for TVs with debug logging."""
    ctx.run(f"tvremote --verbose scan --timeout {timeout}", pty=True)


@task
def build_package(ctx):
    """
    Build sdist and wheel into dist/.
    """
    ctx.run("rm -rf dist")
    ctx.run("uv build")


@task
def release(ctx):
    """Run lint and tests, build, and publish to PyPI using uv."""
    token = os.getenv("PYPI_TOKEN")
    if not token:
        raise ValueError("PYPI_TOKEN environment variable is not set")

    ctx.run("invoke lint test")
    ctx.run("invoke build-package")
    ctx.run(f"uv publish --token {token}")
