"""Command-line inspection of a pcc output tree."""

from __future__ import annotations

import argparse
import sys

from .actions import build_make_actions
from .core import MakeConfig, RebuildPolicy, UnknownModuleError
from .fs import MakeError


def _module_map(entries, policy):
    module_map = {}
    for entry in entries:
        name, sep, source = entry.partition("=")
        module_map[name] = source if sep else policy
    return module_map


def parse_args(args):
    argp = argparse.ArgumentParser(description="pcc incremental build helper")
    argp.add_argument(
        "--header-ext", default=MakeConfig.header_ext, help="Header file extension"
    )
    argp.add_argument(
        "--impl-ext", default=MakeConfig.impl_ext, help="Implementation file extension"
    )
    argp.add_argument(
        "--other-ext",
        action="append",
        dest="other_exts",
        metavar="EXT",
        help="Extra foreign companion extension (repeatable)",
    )
    sub = argp.add_subparsers(dest="command", required=True)

    status = sub.add_parser("status", help="Report which modules need a rebuild")
    status.add_argument("output", help="Output directory")
    status.add_argument(
        "modules",
        nargs="+",
        metavar="MODULE[=SOURCE]",
        help="Module name, optionally with its source file",
    )
    status.add_argument(
        "--always",
        action="store_true",
        help="Rebuild modules without a source file unconditionally",
    )

    externs = sub.add_parser("externs", help="Print a module's persisted externs")
    externs.add_argument("output", help="Output directory")
    externs.add_argument("module", help="Module name")

    paths = sub.add_parser("paths", help="Print the output paths for a module")
    paths.add_argument("output", help="Output directory")
    paths.add_argument("module", help="Module name")

    return argp.parse_args(args)


def _config(params):
    other_exts = params.other_exts if params.other_exts is not None else MakeConfig.other_exts
    return MakeConfig(
        header_ext=params.header_ext, impl_ext=params.impl_ext, other_exts=other_exts
    )


def main(args):
    params = parse_args(args)
    try:
        config = _config(params)
        if params.command == "status":
            policy = RebuildPolicy.ALWAYS if params.always else RebuildPolicy.NEVER
            module_map = _module_map(params.modules, policy)
            actions = build_make_actions(params.output, module_map, config)
            for name in module_map:
                state = "stale" if actions.needs_rebuild(name) else "up to date"
                print(f"{name}: {state}")
        elif params.command == "externs":
            actions = build_make_actions(params.output, {}, config)
            _, text = actions.read_externs(params.module)
            print(text)
        elif params.command == "paths":
            artifacts = build_make_actions(params.output, {}, config).artifacts(params.module)
            for path in artifacts.primary:
                print(path)
            print(artifacts.ffi_header)
            print(artifacts.ffi_implementation)
            for path in artifacts.ffi_others.values():
                print(path)
    except (MakeError, UnknownModuleError, ValueError) as exc:
        print(f"✗ {exc}")
        return 1
    return 0


__all__ = ["main", "parse_args"]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
