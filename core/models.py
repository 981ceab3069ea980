"""Core data models for the pnpm packager."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PackagerOptions:
    """Options recognized by the packager operations."""

    no_install: bool = False


@dataclass(frozen=True)
class KnownError:
    """A pnpm stderr pattern that does not fail a dependency listing."""

    pattern: str
    log: bool = False  # metadata only, never forces failure


@dataclass
class ProcessOutput:
    """Captured result of a finished subprocess."""

    stdout: str
    stderr: str
    returncode: int = 0


@dataclass
class LockfileNode:
    """A node of a lockfile tree.

    Keys other than ``version`` and ``dependencies`` are carried in ``extra``
    so that a load/dump round trip keeps them. ``key_order`` records the
    original key order of the mapping.
    """

    version: Any = None  # str, or a bare YAML number
    dependencies: dict[str, "LockfileNode"] | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: list[str] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LockfileNode":
        extra = {k: v for k, v in data.items() if k not in ("version", "dependencies")}
        dependencies = data.get("dependencies")
        if isinstance(dependencies, dict) and all(
            isinstance(child, dict) for child in dependencies.values()
        ):
            dependencies = {name: cls.from_dict(child) for name, child in dependencies.items()}
        else:
            if dependencies is not None:
                extra["dependencies"] = dependencies
            dependencies = None
        return cls(
            version=data.get("version"),
            dependencies=dependencies,
            extra=extra,
            key_order=list(data),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.version is not None:
            data["version"] = self.version
        data.update(self.extra)
        if self.dependencies is not None:
            data["dependencies"] = {
                name: child.to_dict() for name, child in self.dependencies.items()
            }
        # known keys first in their original order, new keys after
        ordered = {key: data[key] for key in self.key_order if key in data}
        ordered.update((key, value) for key, value in data.items() if key not in ordered)
        return ordered
