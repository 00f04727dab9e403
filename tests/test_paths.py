import pytest

from nsbench.paths import (
    hash_path_component,
    normalize_absolute_path,
    path_depth,
    prepare_path,
    split_normalized_path,
)
from nsbench.types import BenchError


def test_hash_of_empty_component_is_fnv_offset():
    assert hash_path_component("") == 14695981039346656037


def test_hash_known_fnv1a_value():
    assert hash_path_component("a") == 0xAF63DC4C8601EC8C


def test_hash_fits_in_64_bits_and_differs():
    values = {hash_path_component(name) for name in ["d0001", "d0002", "f0001.dat"]}
    assert len(values) == 3
    assert all(0 <= v < 2**64 for v in values)


def test_normalize_collapses_and_trims():
    assert normalize_absolute_path("//a///b/") == "/a/b"


def test_normalize_converts_backslashes():
    assert normalize_absolute_path("\\a\\b") == normalize_absolute_path("/a/b")


def test_normalize_root_variants():
    assert normalize_absolute_path("///") == "/"
    assert normalize_absolute_path("/") == "/"


@pytest.mark.parametrize("bad", ["", "a/b", "relative"])
def test_normalize_rejects_relative(bad):
    with pytest.raises(BenchError):
        normalize_absolute_path(bad)


@pytest.mark.parametrize("path", ["/a/b/c", "//x//y/", "/single", "\\p\\q"])
def test_normalize_is_idempotent(path):
    once = normalize_absolute_path(path)
    assert normalize_absolute_path(once) == once


def test_split_root_is_empty():
    assert split_normalized_path("/") == []


def test_split_rejects_relative():
    with pytest.raises(BenchError):
        split_normalized_path("a/b")


def test_split_joins_back():
    normalized = "/d0001/d0002/f0001.dat"
    assert "/" + "/".join(split_normalized_path(normalized)) == normalized


def test_prepare_path_consistency():
    prepared = prepare_path("//d1//d2/file/")
    assert prepared.normalized == normalize_absolute_path("//d1//d2/file/")
    assert prepared.components == ["d1", "d2", "file"]
    assert prepared.masstree_hashes == [hash_path_component(c) for c in prepared.components]
    assert prepared.depth() == path_depth(prepared.normalized)


def test_prepare_path_rejects_relative():
    with pytest.raises(BenchError):
        prepare_path("no/slash")


def test_path_depth_root_and_empty():
    assert path_depth("/") == 0
    assert path_depth("") == 0


def test_path_depth_matches_split():
    normalized = "/a/bb/ccc/dddd"
    assert path_depth(normalized) == len(split_normalized_path(normalized))