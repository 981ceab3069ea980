"""CLI application for the pnpm packager."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console

from core import pnpm
from core.config import get_settings
from core.lockfile import load_lockfile, rebase_lockfile, serialize_lockfile
from core.logging import setup_logging
from core.models import PackagerOptions
from core.spawn import SpawnError

console = Console()
err_console = Console(stderr=True)


def fail(message: str) -> None:
    """Print an error and exit with code 1."""
    err_console.print(f"Error: {message}", style="red", markup=False, soft_wrap=True)
    raise typer.Exit(1)


def report_spawn_error(error: SpawnError) -> None:
    if error.stderr.strip():
        err_console.print(
            error.stderr.rstrip(), style="dim", markup=False, highlight=False, soft_wrap=True
        )
    fail(str(error))


app = typer.Typer(
    name="pnpm-packager",
    help="pnpm packager - list, install, prune and run scripts through pnpm",
    add_completion=False,
)


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", help="Override log level"),
) -> None:
    """pnpm packager - list, install, prune and run scripts through pnpm."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level, settings.log_format)


@app.command()
def deps(
    cwd: str = typer.Argument(".", help="Package directory"),
    depth: int | None = typer.Option(None, "--depth", "-d", min=1, help="Dependency depth"),
) -> None:
    """Print the production dependency graph as JSON."""
    try:
        depth = depth or get_settings().default_depth
        result = asyncio.run(pnpm.get_prod_dependencies(cwd, depth))
        typer.echo(json.dumps(result, indent=2))
    except SpawnError as e:
        report_spawn_error(e)
    except json.JSONDecodeError as e:
        fail(f"pnpm returned invalid JSON: {e}")


@app.command()
def install(
    cwd: str = typer.Argument(".", help="Package directory"),
    no_install: bool = typer.Option(False, "--no-install", help="Skip installation"),
) -> None:
    """Install dependencies."""
    try:
        asyncio.run(pnpm.install(cwd, PackagerOptions(no_install=no_install)))
    except SpawnError as e:
        report_spawn_error(e)
    if no_install:
        console.print("Install skipped")
    else:
        console.print(f"Installed dependencies in {cwd}")


@app.command()
def prune(cwd: str = typer.Argument(".", help="Package directory")) -> None:
    """Remove extraneous packages."""
    try:
        asyncio.run(pnpm.prune(cwd))
    except SpawnError as e:
        report_spawn_error(e)
    console.print(f"Pruned {cwd}")


@app.command()
def run(
    scripts: list[str] = typer.Argument(help="Script names, run in order"),
    cwd: str = typer.Option(".", "--cwd", help="Package directory"),
) -> None:
    """Run package scripts one after another."""
    try:
        asyncio.run(pnpm.run_scripts(cwd, scripts))
    except SpawnError as e:
        report_spawn_error(e)
    console.print(f"Ran {len(scripts)} script(s)")


@app.command("rebase-lockfile")
def rebase_lockfile_command(
    lockfile: str = typer.Argument(help=f"Path to {pnpm.LOCKFILE_NAME}"),
    package_root: str = typer.Argument(help="Path to the package root"),
    output: str | None = typer.Option(None, "--out", "-o", help="Output file (use '-' for stdout)"),
) -> None:
    """Rebase local file references in a lockfile."""
    path_obj = Path(lockfile)
    if not path_obj.exists():
        fail(f"File {lockfile} not found")

    try:
        node = rebase_lockfile(package_root, load_lockfile(path_obj))
        content = serialize_lockfile(node)

        if output == "-":
            typer.echo(content, nl=False)
        elif output:
            Path(output).write_text(content, encoding="utf-8")
            console.print(f"Wrote rebased lockfile to {output}")
        else:
            path_obj.write_text(content, encoding="utf-8")
            console.print(f"Rebased {lockfile}")
    except Exception as e:
        fail(str(e))


@app.command()
def info() -> None:
    """Show packager capabilities."""
    typer.echo(
        json.dumps(
            {
                "command": pnpm.pnpm_command(),
                "lockfile_name": pnpm.LOCKFILE_NAME,
                "must_copy_modules": pnpm.MUST_COPY_MODULES,
                "copy_package_section_names": pnpm.COPY_PACKAGE_SECTION_NAMES,
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    app()
