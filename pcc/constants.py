"""Shared constant values for the pcc make layer."""

TOOL_NAME = "pcc"
VERSION = "0.9.2"

HEADER_EXT = "hh"
IMPL_EXT = "cc"
OTHER_EXTS = ("h", "inl")

FFI_MANGLE = "_ffi"
EXTERNS_FILE = "externs.json"
SUPPORT_DIR = "PureScript"

__all__ = [
    "TOOL_NAME",
    "VERSION",
    "HEADER_EXT",
    "IMPL_EXT",
    "OTHER_EXTS",
    "FFI_MANGLE",
    "EXTERNS_FILE",
    "SUPPORT_DIR",
]
