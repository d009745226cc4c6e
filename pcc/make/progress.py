"""Build lifecycle events and their rendering."""

from __future__ import annotations

from dataclasses import dataclass

from .core import ModuleName


@dataclass(frozen=True)
class CompilingModule:
    name: ModuleName


def render_progress_message(message) -> str:
    if isinstance(message, CompilingModule):
        return f"Compiling {message.name}"
    raise TypeError(f"Unknown progress message: {message!r}")


class ProgressReporter:
    """Prints one line per event, synchronously and in emission order."""

    def __init__(self, emit=print):
        self.emit = emit

    def __call__(self, message) -> None:
        self.emit(render_progress_message(message))


__all__ = ["CompilingModule", "ProgressReporter", "render_progress_message"]
