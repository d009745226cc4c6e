"""Core data structures for the make layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import enum
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from ..constants import (
    EXTERNS_FILE,
    FFI_MANGLE,
    HEADER_EXT,
    IMPL_EXT,
    OTHER_EXTS,
    SUPPORT_DIR,
    TOOL_NAME,
    VERSION,
)

Timestamp = Optional[datetime]


@dataclass(frozen=True)
class ModuleName:
    """Dotted hierarchical name of a compilation unit."""

    value: str

    def __post_init__(self):
        value = (self.value or "").strip()
        if not value:
            raise ValueError("Module name must not be empty")
        if any(not part for part in value.split(".")):
            raise ValueError(f"Module name has an empty segment: {value!r}")
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value

    @property
    def path_parts(self) -> tuple[str, ...]:
        return tuple(self.value.split("."))

    @property
    def relative_dir(self) -> Path:
        return Path(*self.path_parts)

    @property
    def base_name(self) -> str:
        return self.path_parts[-1]

    @classmethod
    def coerce(cls, name: "ModuleName | str") -> "ModuleName":
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            return cls(name)
        raise TypeError(f"Unsupported module name type: {type(name)!r}")


class RebuildPolicy(enum.Enum):
    """How a module without a backing file is rebuilt."""

    NEVER = "never"
    ALWAYS = "always"


@dataclass(frozen=True)
class FileBacked:
    path: Path

    def __post_init__(self):
        object.__setattr__(self, "path", Path(self.path))


@dataclass(frozen=True)
class PolicyGoverned:
    policy: RebuildPolicy


SourceLocation = Union[FileBacked, PolicyGoverned]


def coerce_location(location) -> SourceLocation:
    """Turn a module-map value into a :data:`SourceLocation`."""

    if isinstance(location, (FileBacked, PolicyGoverned)):
        return location
    if isinstance(location, RebuildPolicy):
        return PolicyGoverned(location)
    if isinstance(location, (str, Path)):
        return FileBacked(Path(location))
    raise TypeError(f"Unsupported source location: {location!r}")


def normalize_module_map(module_map: Mapping) -> dict[ModuleName, SourceLocation]:
    return {
        ModuleName.coerce(name): coerce_location(location)
        for name, location in module_map.items()
    }


class UnknownModuleError(LookupError):
    """Raised when a module is not present in the make module map."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Module {name} has no filename in 'make'")


def _check_ext(ext: str) -> str:
    ext = (ext or "").strip()
    if not ext:
        raise ValueError("File extensions must not be empty")
    if ext.startswith("."):
        raise ValueError(f"File extension {ext!r} must not start with a dot")
    return ext


@dataclass(frozen=True)
class MakeConfig:
    """Per-build settings; defaults come from :mod:`pcc.constants`."""

    header_ext: str = HEADER_EXT
    impl_ext: str = IMPL_EXT
    other_exts: tuple[str, ...] = OTHER_EXTS
    ffi_mangle: str = FFI_MANGLE
    externs_file: str = EXTERNS_FILE
    support_dir: str = SUPPORT_DIR
    use_prefix: bool = True
    tool_name: str = TOOL_NAME
    version: str = VERSION

    def __post_init__(self):
        object.__setattr__(self, "header_ext", _check_ext(self.header_ext))
        object.__setattr__(self, "impl_ext", _check_ext(self.impl_ext))
        others = tuple(_check_ext(ext) for ext in (self.other_exts or ()))
        object.__setattr__(self, "other_exts", others)
        if not self.ffi_mangle:
            raise ValueError("FFI mangle suffix must not be empty")

    @property
    def banner(self) -> str:
        return f"Generated by {self.tool_name} version {self.version}"


def _with_ext(base: Path, ext: str) -> Path:
    return base.with_name(f"{base.name}.{ext}")


@dataclass(frozen=True)
class ModuleArtifacts:
    """Every output path the make layer may produce for one module."""

    directory: Path
    implementation: Path
    header: Path
    externs: Path
    ffi_header: Path
    ffi_implementation: Path
    ffi_others: dict[str, Path] = field(default_factory=dict)

    @property
    def primary(self) -> tuple[Path, Path, Path]:
        return (self.implementation, self.header, self.externs)

    @classmethod
    def for_module(cls, output_dir, name, config: MakeConfig) -> "ModuleArtifacts":
        name = ModuleName.coerce(name)
        directory = Path(output_dir) / name.relative_dir
        base = directory / name.base_name
        mangled = base.with_name(base.name + config.ffi_mangle)
        return cls(
            directory=directory,
            implementation=_with_ext(base, config.impl_ext),
            header=_with_ext(base, config.header_ext),
            externs=directory / config.externs_file,
            ffi_header=_with_ext(mangled, config.header_ext),
            ffi_implementation=_with_ext(mangled, config.impl_ext),
            ffi_others={ext: _with_ext(mangled, ext) for ext in config.other_exts},
        )


def input_companions(source, config: MakeConfig) -> dict[str, Path]:
    """Foreign companion paths sitting next to a source file, keyed by extension."""

    base = Path(source).with_suffix("")
    exts = [config.impl_ext, config.header_ext, *config.other_exts]
    return {ext: _with_ext(base, ext) for ext in dict.fromkeys(exts)}


def max_present(timestamps: Iterable[Timestamp]) -> Timestamp:
    """Latest of the given timestamps, ignoring absent ones."""

    present = [ts for ts in timestamps if ts is not None]
    return max(present) if present else None


def min_all_present(timestamps: Iterable[Timestamp]) -> Timestamp:
    """Earliest of the given timestamps, or ``None`` if any one is absent."""

    result = None
    for ts in timestamps:
        if ts is None:
            return None
        result = ts if result is None else min(result, ts)
    return result


__all__ = [
    "FileBacked",
    "MakeConfig",
    "ModuleArtifacts",
    "ModuleName",
    "PolicyGoverned",
    "RebuildPolicy",
    "SourceLocation",
    "Timestamp",
    "UnknownModuleError",
    "coerce_location",
    "input_companions",
    "max_present",
    "min_all_present",
    "normalize_module_map",
]
