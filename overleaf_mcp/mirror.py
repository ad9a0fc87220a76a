"""Local git mirror of one Overleaf project.

A :class:`RepositoryMirror` owns the working copy at ``<base_dir>/<project_id>``.
Every read or write first brings that copy up to date: it is cloned when
absent and pulled otherwise, so each call works even as the first call in a
fresh process. Commit and push operate on the copy as it stands.

All public operations on the same mirror directory are serialized through a
per-directory ``asyncio.Lock``; git working copies are not safe under
concurrent mutation.
"""

from __future__ import annotations

import asyncio
import os
import re
import tempfile
import weakref
from pathlib import Path

from .exceptions import AuthenticationError
from .exceptions import FileNotFoundInProjectError
from .exceptions import GitOperationError
from .exceptions import GitTimeoutError
from .exceptions import SyncError
from .exceptions import ValidationError
from .git_runner import GitCommandTimeout
from .git_runner import GitResult
from .git_runner import GitRunner
from .models import CommitResult
from .models import PushResult
from .models import Section
from .models import SectionKind
from .sections import extract_sections
from .sections import filter_sections
from .sections import find_section
from .utils.validation import require_safe_path
from .utils.validation import sanitize_commit_message

DEFAULT_GIT_HOST = "git.overleaf.com"
DEFAULT_COMMIT_TIMEOUT = 30.0
DEFAULT_PUSH_TIMEOUT = 60.0
DEFAULT_SYNC_TIMEOUT = 120.0

GIT_METADATA_DIR = ".git"

# HTTP status as git reports it; bare digits also occur inside hex project ids
AUTH_FAILURE_STATUS = re.compile(r"\berror: 40[13]\b|\b40[13] (?:Forbidden|Unauthorized)\b")
AUTH_FAILURE_MARKERS = (
    "Authentication failed",
    "could not read Username",
    "could not read Password",
    "terminal prompts disabled",
    "Invalid username or password",
)
NOTHING_TO_COMMIT_MARKERS = ("nothing to commit", "no changes added to commit")

# event loop -> mirror path -> lock
_mirror_locks: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()


def default_base_dir() -> Path:
    return Path(tempfile.gettempdir()) / "overleaf-mcp"


def _mirror_lock(local_path: Path) -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    locks = _mirror_locks.setdefault(loop, {})
    return locks.setdefault(str(local_path), asyncio.Lock())


def is_auth_failure(output: str) -> bool:
    if AUTH_FAILURE_STATUS.search(output):
        return True
    return any(marker in output for marker in AUTH_FAILURE_MARKERS)


class RepositoryMirror:
    """Git working copy of a single Overleaf project.

    Args:
        git_token: Overleaf git authentication token.
        project_id: Overleaf project id; also names the local directory.
        base_dir: Parent directory of all mirrors. Defaults to
            ``<system temp>/overleaf-mcp``.
        git_host: Host serving the git remote.
        remote_url: Full remote URL, overriding the token/host form
            (self-hosted servers, local test remotes).
        commit_timeout, push_timeout, sync_timeout: Bounds in seconds for
            commit, push and clone/pull/status respectively.
        author_name, author_email: Identity recorded on commits, when the
            environment does not already provide one.
        runner: Git command runner; built from the token when omitted.
    """

    def __init__(
        self,
        git_token: str,
        project_id: str,
        base_dir: str | Path | None = None,
        git_host: str = DEFAULT_GIT_HOST,
        remote_url: str | None = None,
        commit_timeout: float = DEFAULT_COMMIT_TIMEOUT,
        push_timeout: float = DEFAULT_PUSH_TIMEOUT,
        sync_timeout: float = DEFAULT_SYNC_TIMEOUT,
        author_name: str | None = None,
        author_email: str | None = None,
        runner: GitRunner | None = None,
    ):
        if not project_id or not project_id.strip() or "/" in project_id or "\\" in project_id or project_id in (".", ".."):
            raise ValidationError("Invalid project id", field="project_id", value=project_id)
        self.git_token = git_token
        self.project_id = project_id.strip()
        self.base_dir = Path(base_dir) if base_dir else default_base_dir()
        self.local_path = self.base_dir / self.project_id
        self.repo_url = remote_url or f"https://git:{git_token}@{git_host}/{self.project_id}"
        self.commit_timeout = commit_timeout
        self.push_timeout = push_timeout
        self.sync_timeout = sync_timeout

        identity: dict[str, str] = {}
        if author_name:
            identity["GIT_AUTHOR_NAME"] = identity["GIT_COMMITTER_NAME"] = author_name
        if author_email:
            identity["GIT_AUTHOR_EMAIL"] = identity["GIT_COMMITTER_EMAIL"] = author_email
        self.runner = runner or GitRunner(secrets=[git_token], extra_env=identity)

    def __repr__(self) -> str:
        return f"RepositoryMirror(project_id={self.project_id!r}, local_path={str(self.local_path)!r})"

    # === Synchronization ===

    def is_present(self) -> bool:
        """True if the local working copy exists and is accessible."""
        return self.local_path.is_dir() and os.access(self.local_path, os.R_OK | os.X_OK)

    async def ensure_synced(self) -> None:
        """Clone the project if it is not mirrored yet, otherwise pull."""
        async with _mirror_lock(self.local_path):
            await self._sync()

    async def _sync(self) -> None:
        if self.is_present():
            await self._sync_step("pull", ["pull"], cwd=self.local_path)
        else:
            await self._clone()

    async def _ensure_present(self) -> None:
        if not self.is_present():
            await self._clone()

    async def _clone(self) -> None:
        await asyncio.to_thread(self.local_path.parent.mkdir, mode=0o755, parents=True, exist_ok=True)
        await self._sync_step("clone", ["clone", self.repo_url, str(self.local_path)], cwd=None)

    async def _sync_step(self, operation: str, args: list[str], cwd: Path | None) -> None:
        result = await self._run(operation, args, timeout=self.sync_timeout, cwd=cwd)
        if result.ok:
            return
        detail = result.output.strip()
        if is_auth_failure(detail):
            raise AuthenticationError(operation, detail)
        raise SyncError(operation, detail or f"git exited with status {result.returncode}")

    async def _run(
        self,
        operation: str,
        args: list[str],
        timeout: float,
        cwd: Path | None = None,
        budget: float | None = None,
    ) -> GitResult:
        """Run a git command, mapping timeouts and a missing binary to domain errors.

        ``budget`` is the bound reported on timeout when ``timeout`` is only
        the remainder of a larger allowance.
        """
        try:
            return await self.runner.run(args, cwd=cwd, timeout=timeout)
        except GitCommandTimeout:
            raise GitTimeoutError(operation, budget if budget is not None else timeout) from None
        except OSError as e:
            raise GitOperationError(operation, f"could not run git: {e}") from e

    # === Path handling ===

    def _resolve(self, file_path: str) -> Path:
        """Map a project-relative path to an absolute path inside the mirror."""
        root = self.local_path.resolve()
        full_path = (root / file_path).resolve()
        if root not in full_path.parents:
            raise ValidationError("Path must name a file inside the project", field="file_path", value=file_path)
        if full_path.relative_to(root).parts[0] == GIT_METADATA_DIR:
            raise ValidationError("Git metadata cannot be accessed", field="file_path", value=file_path)
        return full_path

    # === File operations ===

    async def list_files(self, extension: str | None = ".tex") -> list[str]:
        """Return project-relative paths of regular files, optionally filtered by suffix."""
        async with _mirror_lock(self.local_path):
            await self._sync()
            return await asyncio.to_thread(self._walk, extension)

    def _walk(self, extension: str | None) -> list[str]:
        files = []
        for dirpath, dirnames, filenames in os.walk(self.local_path):
            dirnames[:] = [d for d in dirnames if d != GIT_METADATA_DIR]
            for name in filenames:
                full_path = Path(dirpath) / name
                if not full_path.is_file() or full_path.is_symlink():
                    continue
                if extension and not name.endswith(extension):
                    continue
                files.append(full_path.relative_to(self.local_path).as_posix())
        return sorted(files)

    async def read_file(self, file_path: str) -> str:
        """Return the text of a project file."""
        relative = require_safe_path(file_path)
        async with _mirror_lock(self.local_path):
            await self._sync()
            return await asyncio.to_thread(self._read_text, relative)

    def _read_text(self, relative: str) -> str:
        full_path = self._resolve(relative)
        if not full_path.is_file():
            raise FileNotFoundInProjectError(self.project_id, relative)
        try:
            # Undecodable bytes (Latin-1 sources) become U+FFFD
            with open(full_path, encoding="utf-8", errors="replace", newline="") as f:
                return f.read()
        except OSError as e:
            raise GitOperationError("read", f"could not read '{relative}': {e}") from e

    async def write_file(self, file_path: str, content: str) -> str:
        """Create or overwrite a project file; returns the absolute local path."""
        relative = require_safe_path(file_path)
        async with _mirror_lock(self.local_path):
            await self._sync()
            return str(await asyncio.to_thread(self._write_text, relative, content))

    def _write_text(self, relative: str, content: str) -> Path:
        full_path = self._resolve(relative)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            with open(full_path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise GitOperationError("write", f"could not write '{relative}': {e}") from e
        return full_path

    async def delete_file(self, file_path: str) -> str:
        """Remove a project file; returns the absolute local path it had."""
        relative = require_safe_path(file_path)
        async with _mirror_lock(self.local_path):
            await self._sync()
            return str(await asyncio.to_thread(self._unlink, relative))

    def _unlink(self, relative: str) -> Path:
        full_path = self._resolve(relative)
        if not full_path.is_file():
            raise FileNotFoundInProjectError(self.project_id, relative)
        try:
            full_path.unlink()
        except OSError as e:
            raise GitOperationError("delete", f"could not delete '{relative}': {e}") from e
        return full_path

    # === Document structure ===

    async def get_sections(self, file_path: str) -> list[Section]:
        return extract_sections(await self.read_file(file_path))

    async def get_section(self, file_path: str, title: str) -> Section | None:
        return find_section(await self.get_sections(file_path), title)

    async def get_sections_by_type(self, file_path: str, kind: SectionKind | str) -> list[Section]:
        return filter_sections(await self.get_sections(file_path), kind)

    # === Snapshot operations ===

    async def commit(self, message: str) -> CommitResult:
        """Stage every change in the working copy and commit it.

        A clean working copy is a successful no-op, not an error.
        """
        message = sanitize_commit_message(message, for_shell=False)
        if not message:
            raise ValidationError("Commit message cannot be empty", field="message")

        async with _mirror_lock(self.local_path):
            await self._ensure_present()
            loop = asyncio.get_running_loop()
            started = loop.time()

            staged = await self._run("commit", ["add", "-A"], timeout=self.commit_timeout, cwd=self.local_path)
            if not staged.ok:
                raise GitOperationError("commit", staged.output.strip())

            remaining = max(self.commit_timeout - (loop.time() - started), 0.0)
            result = await self._run(
                "commit",
                ["commit", "-m", message],
                timeout=remaining,
                cwd=self.local_path,
                budget=self.commit_timeout,
            )

        if result.ok:
            return CommitResult(status="success", message=result.stdout.strip() or "Commit successful")
        if any(marker in result.output for marker in NOTHING_TO_COMMIT_MARKERS):
            return CommitResult(status="noop", message="Nothing to commit, working tree clean")
        raise GitOperationError("commit", result.output.strip() or f"git exited with status {result.returncode}")

    async def push(self) -> PushResult:
        """Send committed changes to the Overleaf remote."""
        async with _mirror_lock(self.local_path):
            await self._ensure_present()
            result = await self._run("push", ["push"], timeout=self.push_timeout, cwd=self.local_path)

        detail = result.output.strip()
        if result.ok:
            return PushResult(message=detail or "Push successful")
        if is_auth_failure(detail):
            raise AuthenticationError("push", detail)
        raise GitOperationError("push", detail or f"git exited with status {result.returncode}")

    async def status(self) -> str:
        """Return ``git status`` output for the freshly synced working copy."""
        async with _mirror_lock(self.local_path):
            await self._sync()
            result = await self._run("status", ["status"], timeout=self.sync_timeout, cwd=self.local_path)
        if not result.ok:
            raise GitOperationError("status", result.output.strip())
        return result.stdout
