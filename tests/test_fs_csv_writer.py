import pytest

from nsbench.fs.csv_writer import (
    MEMORY_HEADER,
    MISS_HEADER,
    MemoryResultRow,
    MissResultRow,
    write_memory_results,
    write_miss_results,
)
from nsbench.fs.types import FsBenchError, MemorySnapshot


def _read(path):
    return path.read_text(encoding="utf-8").splitlines()


def test_memory_header_and_row(tmp_path):
    snapshot = MemorySnapshot(
        total_meta_bytes=1000,
        bytes_per_file=10,
        slab_dentry_bytes=400,
        slab_inode_bytes=300,
        slab_ext4_inode_bytes=300,
        process_rss_bytes=5000,
    )
    row = MemoryResultRow(
        backend="ext4",
        file_count=100,
        depth=3,
        siblings_per_dir=4,
        files_per_leaf=25,
        phase="after_build",
        snapshot=snapshot,
    )
    out = tmp_path / "mem.csv"
    write_memory_results([row], out)
    lines = _read(out)
    assert lines[0] == MEMORY_HEADER
    assert lines[0].startswith("backend,file_count,depth,siblings_per_dir")
    assert lines[1].split(",") == [
        "ext4", "100", "3", "4", "25", "after_build",
        "1000", "10", "400", "300", "300", "0", "0", "0", "5000",
    ]


def test_memory_column_count_matches_header(tmp_path):
    out = tmp_path / "mem.csv"
    write_memory_results([MemoryResultRow(backend="lhm"), MemoryResultRow(backend="ext4")], out)
    lines = _read(out)
    assert len(lines) == 3
    width = len(lines[0].split(","))
    assert all(len(line.split(",")) == width for line in lines[1:])


def test_miss_row_formats_floats(tmp_path):
    row = MissResultRow(
        backend="lhm",
        mode="warm",
        op="lookup",
        query_kind="negative",
        query_count=8,
        file_count=64,
        depth=2,
        siblings_per_dir=3,
        files_per_leaf=4,
        avg_ns=1.5,
        p50_ns=2.0,
        p95_ns=3.25,
        p99_ns=4.0,
        avg_bytes=0.0,
        success_rate=1.0,
    )
    out = tmp_path / "miss.csv"
    write_miss_results([row], out)
    lines = _read(out)
    assert lines[0] == MISS_HEADER
    fields = lines[1].split(",")
    assert fields[:9] == ["lhm", "warm", "lookup", "negative", "8", "64", "2", "3", "4"]
    assert [float(value) for value in fields[9:]] == [1.5, 2.0, 3.25, 4.0, 0.0, 1.0]
    assert fields[10] == "2"


def test_large_float_uses_six_significant_digits(tmp_path):
    out = tmp_path / "miss.csv"
    write_miss_results([MissResultRow(avg_ns=1234567.0)], out)
    assert _read(out)[1].split(",")[9] == "1.23457e+06"


def test_creates_parent_directories(tmp_path):
    out = tmp_path / "a" / "b" / "mem.csv"
    write_memory_results([], out)
    assert _read(out) == [MEMORY_HEADER]


def test_overwrites_existing_file(tmp_path):
    out = tmp_path / "miss.csv"
    write_miss_results([MissResultRow(backend="one"), MissResultRow(backend="two")], out)
    write_miss_results([MissResultRow(backend="three")], out)
    lines = _read(out)
    assert len(lines) == 2
    assert lines[1].startswith("three,")


def test_open_failure_raises(tmp_path):
    with pytest.raises(FsBenchError, match="failed to open output csv"):
        write_memory_results([], tmp_path)