"""Subprocess execution for packager commands."""

import asyncio

import structlog

from .models import ProcessOutput

log = structlog.get_logger("pnpm_packager.spawn")


class SpawnError(Exception):
    """A command could not be started or exited with a non-zero status."""

    def __init__(
        self,
        message: str,
        stdout: str = "",
        stderr: str = "",
        returncode: int | None = None,
    ):
        super().__init__(message)
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode


async def spawn_process(
    command: str, args: list[str], cwd: str | None = None
) -> ProcessOutput:
    """Run a command to completion and capture its output.

    Args:
        command: Executable name or path
        args: Arguments passed to the executable
        cwd: Working directory for the child process

    Returns:
        Captured stdout/stderr of the finished process

    Raises:
        SpawnError: If the process cannot be started or exits non-zero
    """
    log.debug("spawn", command=command, args=args, cwd=cwd)
    try:
        proc = await asyncio.create_subprocess_exec(
            command,
            *args,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise SpawnError(f"{command} could not be started: {e}", stderr=str(e)) from e

    stdout_bytes, stderr_bytes = await proc.communicate()
    stdout = stdout_bytes.decode("utf-8", errors="replace")
    stderr = stderr_bytes.decode("utf-8", errors="replace")

    if proc.returncode != 0:
        log.debug("spawn_failed", command=command, returncode=proc.returncode)
        raise SpawnError(
            f"{command} {' '.join(args)} failed with code {proc.returncode}",
            stdout=stdout,
            stderr=stderr,
            returncode=proc.returncode,
        )

    return ProcessOutput(stdout=stdout, stderr=stderr, returncode=proc.returncode)
