"""Async git subprocess execution.

Commands are passed to ``git`` as argv lists, never through a shell. Every
invocation disables interactive credential prompts, can carry a timeout,
and has secrets scrubbed from its captured output.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path

GIT_BINARY = "git"


@dataclass
class GitResult:
    """Captured result of a finished git process."""

    args: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, for substring classification."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


class GitCommandTimeout(Exception):
    """Raised by :class:`GitRunner` when a command exceeds its timeout."""

    def __init__(self, args: list[str], timeout: float):
        super().__init__(f"{' '.join(args)} timed out after {timeout:g}s")
        self.args_list = args
        self.timeout = timeout


def redact(text: str, secrets: list[str]) -> str:
    """Replace every occurrence of each secret with ``***``."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, "***")
    return text


class GitRunner:
    """Runs git commands for one mirror.

    Args:
        secrets: Values to scrub from captured output (the access token).
        extra_env: Environment variables added on top of ``os.environ``.
    """

    def __init__(self, secrets: list[str] | None = None, extra_env: dict[str, str] | None = None):
        self.secrets = [s for s in (secrets or []) if s]
        self.extra_env = extra_env or {}

    def build_env(self) -> dict[str, str]:
        env = {**os.environ, **self.extra_env}
        env["GIT_TERMINAL_PROMPT"] = "0"
        return env

    async def run(self, args: list[str], cwd: Path | None = None, timeout: float | None = None) -> GitResult:
        """Run ``git <args>`` and capture its output.

        Raises:
            GitCommandTimeout: If the process does not finish within ``timeout``
                seconds. The process is killed; nothing is rolled back.
        """
        argv = [GIT_BINARY, *args]
        process = await asyncio.create_subprocess_exec(
            *argv,
            cwd=str(cwd) if cwd else None,
            env=self.build_env(),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise GitCommandTimeout(self.redacted_args(argv), timeout) from None

        return GitResult(
            args=self.redacted_args(argv),
            returncode=process.returncode,
            stdout=redact(stdout.decode("utf-8", errors="replace"), self.secrets),
            stderr=redact(stderr.decode("utf-8", errors="replace"), self.secrets),
        )

    def redacted_args(self, argv: list[str]) -> list[str]:
        return [redact(arg, self.secrets) for arg in argv]
