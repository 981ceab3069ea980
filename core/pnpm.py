"""pnpm packager.

Stateless operations that shell out to the pnpm executable.
"""

import json
import sys
from typing import Any

import structlog

from .models import KnownError, PackagerOptions
from .spawn import SpawnError, spawn_process

log = structlog.get_logger("pnpm_packager.pnpm")

LOCKFILE_NAME = "pnpm-lock.yaml"

# package.json sections copied verbatim; pnpm needs none
COPY_PACKAGE_SECTION_NAMES: list[str] = []

# node_modules must be copied wholesale
MUST_COPY_MODULES = True

IGNORED_PNPM_ERRORS: tuple[KnownError, ...] = (
    KnownError("code ELSPROBLEMS", log=False),  # pnpm >= 7
    KnownError("extraneous", log=False),
    KnownError("missing", log=False),
    KnownError("peer dep missing", log=True),
)


def pnpm_command(platform: str | None = None) -> str:
    """Return the pnpm executable name for a platform identifier."""
    platform = sys.platform if platform is None else platform
    return "pnpm.cmd" if platform.startswith("win") else "pnpm"


def _match_known_error(line: str) -> KnownError | None:
    for known in IGNORED_PNPM_ERRORS:
        if line.startswith(f"pnpm ERR! {known.pattern}"):
            return known
    return None


def has_critical_errors(stderr: str) -> bool:
    """Check whether pnpm stderr contains an error that must not be ignored.

    Only the lines before the JSON payload (a line that is exactly ``{``)
    are inspected. The first non-empty line that matches no known error
    marks the output as failed; later lines cannot clear it.

    Args:
        stderr: Captured stderr of a ``pnpm ls`` call

    Returns:
        True if the listing must be treated as failed
    """
    failed = False
    for line in stderr.split("\n"):
        if line == "{":
            break
        if failed:
            continue
        if not line:
            continue
        known = _match_known_error(line)
        if known is None:
            failed = True
        elif known.log:
            log.warning("pnpm_warning", line=line)
    return failed


async def get_prod_dependencies(
    cwd: str, depth: int | None = None, platform: str | None = None
) -> Any:
    """Get the production dependency graph of a package.

    Args:
        cwd: Package directory
        depth: Dependency depth to list (1 when unset)
        platform: Platform identifier used to choose the executable

    Returns:
        Parsed JSON emitted by ``pnpm ls``

    Raises:
        SpawnError: If pnpm fails with errors that are not known noise
        json.JSONDecodeError: If pnpm output is not valid JSON
    """
    command = pnpm_command(platform)
    args = [
        "ls",
        "-prod",  # Only prod dependencies
        "-json",
        f"-depth={depth or 1}",
    ]

    try:
        output = await spawn_process(command, args, cwd=cwd)
        stdout = output.stdout
    except SpawnError as err:
        # Only fail on critical errors, ignoring extra output from pnpm >= 7
        if has_critical_errors(err.stderr) or not err.stdout:
            raise
        log.debug("pnpm_ls_errors_ignored", cwd=cwd, returncode=err.returncode)
        stdout = err.stdout

    return json.loads(stdout)


async def install(
    cwd: str, options: PackagerOptions, platform: str | None = None
) -> None:
    """Install dependencies in ``cwd`` unless ``options.no_install`` is set."""
    if options.no_install:
        return

    await spawn_process(pnpm_command(platform), ["install"], cwd=cwd)


async def prune(cwd: str, platform: str | None = None) -> None:
    await spawn_process(pnpm_command(platform), ["prune"], cwd=cwd)


async def run_scripts(
    cwd: str, script_names: list[str], platform: str | None = None
) -> None:
    """Run package scripts one after another, stopping at the first failure."""
    command = pnpm_command(platform)
    for script_name in script_names:
        await spawn_process(command, ["run", script_name], cwd=cwd)
