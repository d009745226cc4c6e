"""Persisting generated code for one module.

The compiler core hands over a declaration stream in which a single
:data:`END_OF_HEADER` marker separates header declarations from the
implementation. The writer splits it, renders both halves, and then runs a
pipeline of independent write steps:

    implementation -> header -> externs -> runtime support -> FFI companions

The three primary writes are always all attempted. If any of them failed the
first error is raised and the remaining steps are skipped; whatever was
written stays on disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

from ..ffi import ForeignImport, foreign_imports, resolve_ffi_companions
from .core import MakeConfig, ModuleArtifacts, ModuleName, SourceLocation
from .fs import CannotWriteFile, write_file
from .support import bootstrap_runtime_support


class _EndOfHeader:
    def __repr__(self):  # pragma: no cover - representation helper
        return "END_OF_HEADER"


END_OF_HEADER = _EndOfHeader()


@dataclass
class CompiledModule:
    """What the compiler core produced for one module."""

    name: ModuleName
    declarations: Sequence[Any]
    foreign: list[ForeignImport] = field(default_factory=list)

    def __post_init__(self):
        self.name = ModuleName.coerce(self.name)
        self.declarations = list(self.declarations)
        self.foreign = foreign_imports(self.foreign)


def split_at_header_end(declarations: Iterable[Any]):
    """Return ``(header, implementation)`` split at the end-of-header marker."""

    header, implementation = [], []
    target = header
    for decl in declarations:
        if decl is END_OF_HEADER:
            if target is implementation:
                raise ValueError("Declaration stream has more than one end-of-header marker")
            target = implementation
            continue
        target.append(decl)
    return header, implementation


def render_declarations(declarations, environment=None) -> str:
    """Default renderer: one declaration's text per line."""

    lines = []
    for decl in declarations:
        if isinstance(decl, str):
            lines.append(decl)
        elif hasattr(decl, "render"):
            lines.append(decl.render())
        else:
            raise TypeError(f"Cannot render declaration: {decl!r}")
    return "\n".join(lines)


def with_banner(body: str, config: MakeConfig) -> str:
    prefix = [f"// {config.banner}"] if config.use_prefix else []
    return "\n".join(prefix + [body]) + "\n"


class CodegenWriter:
    def __init__(
        self,
        output_dir,
        config: MakeConfig | None = None,
        render: Callable[..., str] = render_declarations,
    ):
        self.output_dir = Path(output_dir)
        self.config = config or MakeConfig()
        self.render = render

    def artifacts(self, name) -> ModuleArtifacts:
        return ModuleArtifacts.for_module(self.output_dir, name, self.config)

    def render_module(self, module: CompiledModule, environment=None):
        """Return ``(header_text, implementation_text)`` for ``module``."""

        header, implementation = split_at_header_end(module.declarations)
        return (
            with_banner(self.render(header, environment), self.config),
            with_banner(self.render(implementation, environment), self.config),
        )

    def write_primary(self, module: CompiledModule, environment, externs) -> ModuleArtifacts:
        if not isinstance(externs, (str, bytes)):
            raise TypeError(
                f"Externs for {module.name} must be str or bytes, not {type(externs).__name__}"
            )
        artifacts = self.artifacts(module.name)
        header_text, impl_text = self.render_module(module, environment)
        steps = [
            (artifacts.implementation, impl_text),
            (artifacts.header, header_text),
            (artifacts.externs, externs),
        ]
        failures = []
        for path, content in steps:
            try:
                write_file(path, content)
            except CannotWriteFile as exc:
                failures.append(exc)
        if failures:
            first = failures[0]
            first.errors = failures
            raise first
        return artifacts

    def codegen(self, module: CompiledModule, environment, externs, location: SourceLocation):
        artifacts = self.write_primary(module, environment, externs)
        bootstrap_runtime_support(self.output_dir, self.config.support_dir)
        resolve_ffi_companions(module, location, artifacts, self.config)
        return artifacts


__all__ = [
    "END_OF_HEADER",
    "CodegenWriter",
    "CompiledModule",
    "render_declarations",
    "split_at_header_end",
    "with_banner",
]
