import pytest

from nsbench.dataset_format import (
    DatasetManifest,
    read_manifest,
    read_namespace_records,
    read_queries,
    write_manifest,
    write_namespace_records,
    write_queries,
)
from nsbench.paths import prepare_path
from nsbench.types import BenchError, NamespaceRecord, NodeType, QueryRecord


def _record(inode_id, parent, node_type, path):
    return NamespaceRecord(inode_id, parent, node_type, path, prepare_path(path))


def _query(path, found, inode_id):
    prepared = prepare_path(path)
    return QueryRecord(path, prepared, found, inode_id, prepared.depth())


def test_manifest_round_trip(tmp_path):
    manifest = DatasetManifest(
        dataset_name="deep_tree",
        depth=3,
        siblings_per_dir=8,
        files_per_leaf=32,
        total_records=57,
        total_queries=100,
        records_tsv="out/records.tsv",
        positive_queries_tsv="out/positive_queries.tsv",
        negative_queries_tsv="out/negative_queries.tsv",
    )
    target = tmp_path / "manifest.txt"
    write_manifest(manifest, target)
    assert read_manifest(target) == manifest


def test_manifest_text_format(tmp_path):
    target = tmp_path / "manifest.txt"
    write_manifest(DatasetManifest(dataset_name="ds", depth=3), target)
    lines = target.read_text().splitlines()
    assert lines[0] == "dataset_name=ds"
    assert "depth=3" in lines
    assert len(lines) == 9


def test_manifest_ignores_unknown_and_malformed_lines(tmp_path):
    target = tmp_path / "manifest.txt"
    target.write_text("\nnoequals\nunknown=1\ndataset_name=a=b\ndepth=4\n")
    parsed = read_manifest(target)
    assert parsed.dataset_name == "a=b"
    assert parsed.depth == 4
    assert parsed.total_records == 0


def test_manifest_bad_integer_raises(tmp_path):
    target = tmp_path / "manifest.txt"
    target.write_text("depth=abc\n")
    with pytest.raises(BenchError):
        read_manifest(target)


def test_read_missing_manifest_raises(tmp_path):
    with pytest.raises(BenchError, match="failed to open manifest"):
        read_manifest(tmp_path / "absent.txt")


def test_records_round_trip(tmp_path):
    records = [
        _record(1, 0, NodeType.DIRECTORY, "/"),
        _record(2, 1, NodeType.DIRECTORY, "/d0001"),
        _record(3, 2, NodeType.FILE, "/d0001/f0001.dat"),
    ]
    target = tmp_path / "records.tsv"
    write_namespace_records(records, target)
    assert read_namespace_records(target) == records


def test_records_header_and_type_names(tmp_path):
    target = tmp_path / "records.tsv"
    write_namespace_records(
        [_record(1, 0, NodeType.DIRECTORY, "/"), _record(2, 1, NodeType.FILE, "/x")], target
    )
    lines = target.read_text().splitlines()
    assert lines[0] == "inode_id\tparent_inode_id\ttype\tpath"
    assert lines[1].split("\t")[2] == "dir"
    assert lines[2].split("\t")[2] == "file"


def test_records_skip_empty_and_short_lines(tmp_path):
    target = tmp_path / "records.tsv"
    target.write_text("header\n\n1\t0\tdir\n2\t1\tfile\t/a\n3\t1\tfile\t\n")
    records = read_namespace_records(target)
    assert [r.path for r in records] == ["/a"]
    assert records[0].prepared.components == ["a"]


def test_records_with_relative_path_raise(tmp_path):
    target = tmp_path / "records.tsv"
    target.write_text("header\n2\t1\tfile\trelative\n")
    with pytest.raises(BenchError):
        read_namespace_records(target)


def test_queries_round_trip(tmp_path):
    queries = [_query("/d0001/f0001.dat", True, 3), _query("/d0001/m0001", False, 0)]
    target = tmp_path / "queries.tsv"
    write_queries(queries, target)
    assert read_queries(target) == queries


def test_queries_expect_found_written_as_digit(tmp_path):
    target = tmp_path / "queries.tsv"
    write_queries([_query("/a", True, 5), _query("/b", False, 0)], target)
    lines = target.read_text().splitlines()
    assert lines[1].split("\t")[1] == "1"
    assert lines[2].split("\t")[1] == "0"


def test_read_missing_queries_raises(tmp_path):
    with pytest.raises(BenchError, match="failed to open queries file"):
        read_queries(tmp_path / "absent.tsv")


def test_write_into_missing_directory_raises(tmp_path):
    with pytest.raises(BenchError):
        write_queries([], tmp_path / "missing" / "queries.tsv")