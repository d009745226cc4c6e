import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from pcc import (  # noqa: E402
    FileBacked,
    MakeConfig,
    ModuleArtifacts,
    ModuleName,
    PolicyGoverned,
    RebuildPolicy,
    coerce_location,
    input_companions,
    max_present,
    min_all_present,
)


def _ts(seconds):
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def test_module_name_maps_to_directory_and_base_name():
    name = ModuleName("Data.Array.ST")
    assert name.path_parts == ("Data", "Array", "ST")
    assert name.relative_dir == Path("Data") / "Array" / "ST"
    assert name.base_name == "ST"
    assert str(name) == "Data.Array.ST"
    assert ModuleName.coerce("Data.Array.ST") == name


@pytest.mark.parametrize("bad", ["", "  ", "Data..Array", ".Main", "Main."])
def test_module_name_rejects_empty_segments(bad):
    with pytest.raises(ValueError):
        ModuleName(bad)


def test_coerce_location_builds_tagged_variants():
    assert coerce_location("src/Main.purs") == FileBacked(Path("src/Main.purs"))
    assert coerce_location(RebuildPolicy.ALWAYS) == PolicyGoverned(RebuildPolicy.ALWAYS)
    existing = PolicyGoverned(RebuildPolicy.NEVER)
    assert coerce_location(existing) is existing
    with pytest.raises(TypeError):
        coerce_location(42)


def test_max_present_ignores_absent_timestamps():
    assert max_present([None, _ts(5), None, _ts(3)]) == _ts(5)
    assert max_present([None, None]) is None
    assert max_present([]) is None


def test_min_all_present_is_absent_when_any_input_is_absent():
    assert min_all_present([_ts(5), _ts(3), _ts(9)]) == _ts(3)
    assert min_all_present([_ts(5), None, _ts(9)]) is None
    assert min_all_present([None]) is None


def test_artifacts_follow_output_tree_layout(tmp_path):
    artifacts = ModuleArtifacts.for_module(tmp_path, "A.B.C", MakeConfig())
    directory = tmp_path / "A" / "B" / "C"
    assert artifacts.directory == directory
    assert artifacts.implementation == directory / "C.cc"
    assert artifacts.header == directory / "C.hh"
    assert artifacts.externs == directory / "externs.json"
    assert artifacts.ffi_header == directory / "C_ffi.hh"
    assert artifacts.ffi_implementation == directory / "C_ffi.cc"
    assert artifacts.ffi_others == {
        "h": directory / "C_ffi.h",
        "inl": directory / "C_ffi.inl",
    }
    assert artifacts.primary == (
        directory / "C.cc",
        directory / "C.hh",
        directory / "externs.json",
    )


def test_input_companions_share_the_source_base_name():
    companions = input_companions(Path("src/Foo/Bar.purs"), MakeConfig())
    assert companions == {
        "cc": Path("src/Foo/Bar.cc"),
        "hh": Path("src/Foo/Bar.hh"),
        "h": Path("src/Foo/Bar.h"),
        "inl": Path("src/Foo/Bar.inl"),
    }


def test_make_config_validates_extensions_and_banner():
    config = MakeConfig(other_exts=["hpp"], version="1.2.3")
    assert config.other_exts == ("hpp",)
    assert config.banner == "Generated by pcc version 1.2.3"

    with pytest.raises(ValueError):
        MakeConfig(header_ext=".hh")
    with pytest.raises(ValueError):
        MakeConfig(impl_ext="")
    with pytest.raises(ValueError):
        MakeConfig(ffi_mangle="")
