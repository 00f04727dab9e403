import pytest

from nsbench.fs.slab import (
    SlabEntry,
    parse_slabinfo,
    query_active_bytes,
    snapshot_slabs,
)
from nsbench.fs.types import FsBenchError

SLABINFO = (
    "slabinfo - version: 2.1\n"
    "# name <active_objs> <num_objs> <objsize> <objperslab> <pagesperslab>\n"
    "ext4_inode_cache 100 120 1080 30 8 : tunables 0 0 0\n"
    "\n"
    "dentry 2000 2100 192 21 1 : tunables 0 0 0\n"
    "broken line\n"
    "inode_cache 50 60 600 27 4 : tunables 0 0 0\n"
)


def test_parse_skips_headers_and_bad_lines():
    slabs = parse_slabinfo(SLABINFO)
    assert [s.name for s in slabs] == ["ext4_inode_cache", "dentry", "inode_cache"]
    assert slabs[1] == SlabEntry(name="dentry", active_objs=2000, num_objs=2100, obj_size=192)


def test_parse_skips_first_two_lines_even_if_valid():
    text = "a 1 2 3\nb 4 5 6\nc 7 8 9\n"
    assert [s.name for s in parse_slabinfo(text)] == ["c"]


def test_active_bytes_is_product():
    entry = SlabEntry(name="x", active_objs=7, num_objs=9, obj_size=11)
    assert entry.active_bytes() == entry.active_objs * entry.obj_size


def test_query_active_bytes_found():
    slabs = parse_slabinfo(SLABINFO)
    assert query_active_bytes(slabs, "inode_cache") == slabs[2].active_bytes()


def test_query_active_bytes_missing_is_zero():
    assert query_active_bytes(parse_slabinfo(SLABINFO), "nope") == 0


def test_query_uses_first_match():
    slabs = [SlabEntry("dup", 1, 1, 8), SlabEntry("dup", 5, 5, 8)]
    assert query_active_bytes(slabs, "dup") == slabs[0].active_bytes()


def test_snapshot_from_file(tmp_path):
    path = tmp_path / "slabinfo"
    path.write_text(SLABINFO, encoding="utf-8")
    assert snapshot_slabs(path) == parse_slabinfo(SLABINFO)


def test_snapshot_missing_file_raises(tmp_path):
    with pytest.raises(FsBenchError, match="failed to open"):
        snapshot_slabs(tmp_path / "missing")