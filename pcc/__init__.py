"""Incremental build layer of the pcc compiler."""

from . import constants as _constants
from . import make as _make
from . import ffi as _ffi
from .constants import *  # noqa: F401,F403
from .make import *  # noqa: F401,F403
from .ffi import *  # noqa: F401,F403

__all__ = []
__all__ += getattr(_constants, "__all__", [])
__all__ += getattr(_make, "__all__", [])
__all__ += getattr(_ffi, "__all__", [])
