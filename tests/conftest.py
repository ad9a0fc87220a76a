"""The pytest configuration for Overleaf MCP testing.

Every test gets its own mirror directory and projects file, and log files are
written to a throwaway directory. Integration fixtures build a local bare git
repository that stands in for the Overleaf remote.
"""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

# Must be set before overleaf_mcp is imported: log handlers and the metrics
# switch are configured at import time.
os.environ.setdefault("OVERLEAF_MCP_LOG_DIR", tempfile.mkdtemp(prefix="overleaf-mcp-test-logs-"))
os.environ.setdefault("MCP_METRICS_ENABLED", "false")

from overleaf_mcp.config import reset_settings  # noqa: E402

GIT_IDENTITY = {
    "GIT_AUTHOR_NAME": "Test Author",
    "GIT_AUTHOR_EMAIL": "author@example.com",
    "GIT_COMMITTER_NAME": "Test Author",
    "GIT_COMMITTER_EMAIL": "author@example.com",
}

SETTINGS_ENV_VARS = (
    "OVERLEAF_GIT_TOKEN",
    "OVERLEAF_PROJECT_ID",
    "OVERLEAF_PROJECT_NAME",
    "OVERLEAF_REMOTE_URL",
    "OVERLEAF_GIT_HOST",
    "COMMIT_TIMEOUT",
    "PUSH_TIMEOUT",
    "SYNC_TIMEOUT",
    "MAX_CONTENT_LENGTH",
    "MAX_COMMIT_MESSAGE_LENGTH",
)

MAIN_TEX = """\\documentclass{article}
\\begin{document}
\\section{Introduction}
Overleaf projects are git repositories.
\\subsection{Motivation}
Editing from scripts.
\\section{Method}
Mirror, edit, commit, push.
\\end{document}
"""


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at per-test directories and clear cached settings."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("OVERLEAF_TEMP_DIR", str(tmp_path / "mirrors"))
    monkeypatch.setenv("OVERLEAF_PROJECTS_FILE", str(tmp_path / "projects.json"))
    reset_settings()
    yield tmp_path
    reset_settings()


@pytest.fixture
def mirror_base(tmp_path):
    """Directory under which mirrors are created."""
    return tmp_path / "mirrors"


def run_git(*args, cwd=None):
    """Run git synchronously for fixture setup, failing loudly."""
    env = {**os.environ, **GIT_IDENTITY, "GIT_TERMINAL_PROMPT": "0"}
    return subprocess.run(["git", *args], cwd=cwd, env=env, check=True, capture_output=True, text=True)


@pytest.fixture
def git_identity(monkeypatch):
    """Give git an author identity without touching the user's config."""
    for name, value in GIT_IDENTITY.items():
        monkeypatch.setenv(name, value)


@pytest.fixture
def bare_remote(tmp_path, git_identity):
    """A bare repository on branch ``main`` seeded with ``main.tex``.

    Returns the path of the bare repository, usable as a remote URL.
    """
    if shutil.which("git") is None:
        pytest.skip("Test requires the git binary")

    remote = tmp_path / "remote.git"
    seed = tmp_path / "seed"
    run_git("init", "--bare", str(remote))
    run_git("symbolic-ref", "HEAD", "refs/heads/main", cwd=remote)

    run_git("init", str(seed))
    (seed / "main.tex").write_text(MAIN_TEX, encoding="utf-8")
    (seed / "refs.bib").write_text("@article{key, title={T}}\n", encoding="utf-8")
    run_git("add", "-A", cwd=seed)
    run_git("commit", "-m", "Initial project", cwd=seed)
    run_git("push", str(remote), "HEAD:refs/heads/main", cwd=seed)
    return remote


@pytest.fixture
def remote_checkout(tmp_path, bare_remote):
    """A second clone of the remote, playing the part of an Overleaf editor."""

    def _checkout() -> Path:
        path = tmp_path / "editor"
        if not path.exists():
            run_git("clone", str(bare_remote), str(path))
        else:
            run_git("pull", cwd=path)
        return path

    return _checkout


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "integration: tests that drive a real git binary")
