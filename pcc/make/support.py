"""Shared runtime-support files unpacked once per output tree."""

from __future__ import annotations

from importlib import resources
from pathlib import Path
import threading
from types import MappingProxyType

from ..constants import SUPPORT_DIR
from .fs import dir_exists, write_file

# Output file name -> packaged resource name.
_SUPPORT_LAYOUT = {
    "PureScript.hh": "purescript.hh",
    "PureScript.cc": "purescript.cc",
    "purescript_memory.hh": "purescript_memory.hh",
}


def _load_support_files():
    package = resources.files("pcc") / "support"
    return MappingProxyType(
        {name: (package / resource).read_bytes() for name, resource in _SUPPORT_LAYOUT.items()}
    )


RUNTIME_SUPPORT_FILES = _load_support_files()

_BOOTSTRAP_LOCK = threading.Lock()


def bootstrap_runtime_support(output_dir, support_dir=SUPPORT_DIR, files=RUNTIME_SUPPORT_FILES):
    """Unpack the runtime support files unless the support directory exists.

    Only the directory's presence is checked; files inside it are never
    re-validated. Returns ``True`` when files were written.
    """

    target = Path(output_dir) / support_dir
    with _BOOTSTRAP_LOCK:
        if dir_exists(target):
            return False
        for name, payload in files.items():
            write_file(target / name, payload)
    print(f"  ✓ Runtime support written → {target}")
    return True


__all__ = ["RUNTIME_SUPPORT_FILES", "bootstrap_runtime_support"]
