"""
pcc make — incremental rebuild decisions and artifact persistence.

| Layer                         | Purpose                                    |
<------------------------------ + ------------------------------------------->
| **Freshness**                 | Input/output timestamps, staleness rule    |
| **Codegen writer**            | Header/implementation/externs on disk      |
| **FFI companions**            | Hand-written foreign code, `_ffi` mangling |
| **Runtime support**           | One-time unpack of the shared runtime      |
| **Progress**                  | One line per module entering compilation   |
"""

from . import core as _core
from . import fs as _fs
from . import freshness as _freshness
from . import progress as _progress
from . import support as _support
from . import codegen as _codegen
from . import actions as _actions
from . import driver as _driver
from .cli import main, parse_args

from .core import *
from .fs import *
from .freshness import *
from .progress import *
from .support import *
from .codegen import *
from .actions import *
from .driver import *

__all__ = []
for module in (_core, _fs, _freshness, _progress, _support, _codegen, _actions, _driver):
    __all__.extend(getattr(module, '__all__', []))
__all__ += ['main', 'parse_args']
__all__ = list(dict.fromkeys(__all__))
