"""The set of operations the make layer exposes to the compiler core."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from .codegen import CodegenWriter, CompiledModule
from .core import MakeConfig, ModuleArtifacts
from .freshness import FreshnessOracle
from .fs import read_text_file
from .progress import ProgressReporter


class MakeActions:
    def __init__(
        self,
        output_dir,
        module_map: Mapping,
        config: MakeConfig | None = None,
        reporter: ProgressReporter | None = None,
        writer: CodegenWriter | None = None,
    ):
        self.output_dir = Path(output_dir)
        self.config = config or MakeConfig()
        self.oracle = FreshnessOracle(self.output_dir, module_map, self.config)
        self.writer = writer or CodegenWriter(self.output_dir, self.config)
        self.reporter = reporter or ProgressReporter()

    def artifacts(self, name) -> ModuleArtifacts:
        return ModuleArtifacts.for_module(self.output_dir, name, self.config)

    def get_input_timestamp(self, name):
        return self.oracle.input_timestamp(name)

    def get_output_timestamp(self, name):
        return self.oracle.output_timestamp(name)

    def needs_rebuild(self, name) -> bool:
        return self.oracle.needs_rebuild(name)

    def read_externs(self, name):
        """Load the persisted interface metadata of an already built module."""

        path = self.artifacts(name).externs
        return path, read_text_file(path)

    def codegen(self, module: CompiledModule, environment, externs) -> ModuleArtifacts:
        location = self.oracle.location(module.name)
        return self.writer.codegen(module, environment, externs, location)

    def progress(self, message) -> None:
        self.reporter(message)


def build_make_actions(output_dir, module_map: Mapping, config: MakeConfig | None = None, **kwargs):
    return MakeActions(output_dir, module_map, config, **kwargs)


__all__ = ["MakeActions", "build_make_actions"]
