"""Lockfile loading, dumping and file reference rebasing."""

import re
from pathlib import Path
from typing import Any

import yaml

from .models import LockfileNode

# "file:" followed by two characters that are not a path separator
_LOCAL_REFERENCE = re.compile(r"^file:[^/]{2}")


class LockfileError(Exception):
    """The lockfile document has an unexpected shape."""


def rebase_file_reference(path_to_package_root: str, version: Any) -> Any:
    """Rewrite a relative ``file:`` reference against a package root.

    Args:
        path_to_package_root: Path the reference should be resolved from
        version: Version value from the lockfile; non-strings are left as-is

    Returns:
        The rebased reference, or ``version`` unchanged if it is not local
    """
    if isinstance(version, str) and _LOCAL_REFERENCE.match(version):
        file_path = version[len("file:"):]
        return f"file:{path_to_package_root}/{file_path}".replace("\\", "/")

    return version


def rebase_lockfile(path_to_package_root: str, lockfile: LockfileNode) -> LockfileNode:
    """Rebase every local file reference in a lockfile tree, in place.

    Returns the same root node.
    """
    if lockfile.version:
        lockfile.version = rebase_file_reference(path_to_package_root, lockfile.version)

    if lockfile.dependencies:
        for locked_dependency in lockfile.dependencies.values():
            rebase_lockfile(path_to_package_root, locked_dependency)

    return lockfile


def parse_lockfile(content: str) -> LockfileNode:
    """Parse YAML lockfile content into a node tree."""
    data = yaml.safe_load(content)
    if data is None:
        return LockfileNode()
    if not isinstance(data, dict):
        raise LockfileError(f"Lockfile must be a mapping, got {type(data).__name__}")
    return LockfileNode.from_dict(data)


def load_lockfile(path: str | Path) -> LockfileNode:
    return parse_lockfile(Path(path).read_text(encoding="utf-8"))


def serialize_lockfile(lockfile: LockfileNode) -> str:
    return yaml.safe_dump(lockfile.to_dict(), sort_keys=False, default_flow_style=False)


def dump_lockfile(lockfile: LockfileNode, path: str | Path) -> None:
    Path(path).write_text(serialize_lockfile(lockfile), encoding="utf-8")
