"""Minimal sequential driver over an already ordered list of modules."""

from __future__ import annotations

from typing import Callable, Iterable

from ..constants import SUPPORT_DIR
from .core import ModuleName
from .progress import CompilingModule
from .support import bootstrap_runtime_support


def make_modules(actions, modules: Iterable, compile_module: Callable):
    """Rebuild every stale module in ``modules``, in the order given.

    ``compile_module(name)`` runs the compiler core and returns
    ``(compiled_module, environment, externs)``. Returns the names that were
    rebuilt. The first error stops the run.
    """

    rebuilt = []
    for name in modules:
        name = ModuleName.coerce(name)
        if not actions.needs_rebuild(name):
            continue
        actions.progress(CompilingModule(name))
        compiled, environment, externs = compile_module(name)
        actions.codegen(compiled, environment, externs)
        rebuilt.append(name)
    return rebuilt


def prepare_output(output_dir, support_dir=SUPPORT_DIR):
    """Unpack runtime support up front, before modules are built in parallel."""

    return bootstrap_runtime_support(output_dir, support_dir)


__all__ = ["make_modules", "prepare_output"]
