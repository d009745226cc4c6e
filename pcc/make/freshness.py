"""Input/output timestamps and the staleness rule."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from .core import (
    MakeConfig,
    ModuleArtifacts,
    ModuleName,
    PolicyGoverned,
    RebuildPolicy,
    SourceLocation,
    Timestamp,
    UnknownModuleError,
    input_companions,
    max_present,
    min_all_present,
    normalize_module_map,
)
from .fs import get_timestamp


class FreshnessOracle:
    """Answers whether a single module's outputs are older than its inputs.

    Nothing is cached: every query stats the filesystem again.
    """

    def __init__(self, output_dir, module_map: Mapping, config: MakeConfig | None = None):
        self.output_dir = Path(output_dir)
        self.module_map = normalize_module_map(module_map)
        self.config = config or MakeConfig()

    def location(self, name) -> SourceLocation:
        name = ModuleName.coerce(name)
        try:
            return self.module_map[name]
        except KeyError:
            raise UnknownModuleError(name) from None

    def artifacts(self, name) -> ModuleArtifacts:
        return ModuleArtifacts.for_module(self.output_dir, name, self.config)

    def input_timestamp(self, name) -> RebuildPolicy | Timestamp:
        location = self.location(name)
        if isinstance(location, PolicyGoverned):
            return location.policy
        companions = input_companions(location.path, self.config).values()
        return max_present(get_timestamp(p) for p in [location.path, *companions])

    def output_timestamp(self, name) -> Timestamp:
        return min_all_present(get_timestamp(p) for p in self.artifacts(name).primary)

    def needs_rebuild(self, name) -> bool:
        location = self.location(name)
        output_ts = self.output_timestamp(name)
        if output_ts is None:
            return True
        if isinstance(location, PolicyGoverned):
            return location.policy is RebuildPolicy.ALWAYS
        input_ts = self.input_timestamp(name)
        return input_ts is not None and input_ts > output_ts


__all__ = ["FreshnessOracle"]
