"""Foreign import declarations and hand-written foreign companion files."""

from __future__ import annotations

from dataclasses import dataclass

from .make.core import FileBacked, MakeConfig, ModuleArtifacts, input_companions
from .make.fs import MakeError, copy_file, file_exists, write_file


@dataclass(frozen=True)
class ForeignImport:
    """A binding a module expects hand-written foreign code to supply."""

    name: str

    def __post_init__(self):
        name = (self.name or "").strip()
        if not name:
            raise ValueError("Foreign import requires a name")
        object.__setattr__(self, "name", name)


def foreign_imports(bindings) -> list[ForeignImport]:
    """Normalize ForeignImport objects or plain binding names."""

    if bindings is None:
        return []
    if isinstance(bindings, (str, ForeignImport)):
        raise TypeError("Foreign imports must be given as an iterable of bindings")
    imports = []
    for binding in bindings:
        if isinstance(binding, ForeignImport):
            imports.append(binding)
        elif isinstance(binding, str):
            imports.append(ForeignImport(binding))
        else:
            raise TypeError(f"Unsupported foreign import: {binding!r}")
    return imports


def requires_foreign(module) -> bool:
    return bool(getattr(module, "foreign", None))


def _copy_best_effort(src, dst):
    try:
        if file_exists(src):
            return copy_file(src, dst)
    except (OSError, MakeError):
        pass
    return None


def resolve_ffi_companions(module, location, artifacts: ModuleArtifacts, config: MakeConfig):
    """Copy hand-written companions of ``module`` into its output directory.

    The header companion falls back to an empty placeholder when the module
    declares foreign imports, so native tooling can always include it. The
    implementation companion has no fallback. Extra extensions are copied
    when present and never fail the build. Returns the written paths.
    """

    companions = {}
    if isinstance(location, FileBacked):
        companions = input_companions(location.path, config)

    written = []
    header_src = companions.get(config.header_ext)
    if header_src is not None and file_exists(header_src):
        written.append(copy_file(header_src, artifacts.ffi_header))
    elif requires_foreign(module):
        written.append(write_file(artifacts.ffi_header, b""))

    impl_src = companions.get(config.impl_ext)
    if impl_src is not None and file_exists(impl_src):
        written.append(copy_file(impl_src, artifacts.ffi_implementation))

    for ext, dst in artifacts.ffi_others.items():
        src = companions.get(ext)
        if src is None:
            continue
        copied = _copy_best_effort(src, dst)
        if copied is not None:
            written.append(copied)
    return written


__all__ = [
    "ForeignImport",
    "foreign_imports",
    "requires_foreign",
    "resolve_ffi_companions",
]
