# nsbench

A toolkit for benchmarking how fast hierarchical namespaces resolve paths.
It generates synthetic directory trees and query sets and runs them against
path resolvers. It also writes timing and memory results as CSV.

The package has two parts:

- `nsbench`: resolver benchmarks over generated datasets.
- `nsbench.fs`: file-system workloads, memory sampling, cache control and
  CSV writers for file-system runs.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run pytest:

```
pip install ".[test]"
pytest
```

## Resolver benchmarks

### Preparing paths

`nsbench.paths.prepare_path` normalises an absolute path. It turns
backslashes into forward slashes, collapses runs of slashes and removes
trailing slashes. It then splits the path into components and computes a
64-bit FNV-1a hash for each component:

```python
from nsbench.paths import prepare_path

p = prepare_path("//a\\b/c/")
p.normalized   # "/a/b/c"
p.components   # ["a", "b", "c"]
p.depth()      # 3
```

A path that does not start with a slash raises `nsbench.types.BenchError`.

### Building datasets

`DatasetBuilder` creates a "deep tree" namespace for each requested depth:

- Each level has one main directory (`d0001`, `d0002`, ...).
- Each level also has `siblings_per_dir` sibling directories.
- The deepest main directory holds `files_per_leaf` files.

For each depth, the builder also produces seeded positive queries and
seeded negative queries:

- Positive queries are existing paths, shuffled, excluding `/`.
- Negative queries are a missing child under each of a shuffled set of
  directories.

```python
from nsbench.dataset_builder import DatasetBuilder, DatasetBuildOptions
from nsbench.dataset_format import (
    write_manifest, write_namespace_records, write_queries,
)

options = DatasetBuildOptions(depths=[4, 8], output_root="out")
for ds in DatasetBuilder().build_all(options):
    write_namespace_records(ds.records, ds.manifest.records_tsv)
    write_queries(ds.positive_queries, ds.manifest.positive_queries_tsv)
    write_queries(ds.negative_queries, ds.manifest.negative_queries_tsv)
```

The manifest paths have the form `<output_root>/depth_NN/records.tsv`, and
the queries files follow the same pattern. The write functions do not
create missing directories, so create the output directories first.

Records and queries are stored as tab-separated files with a header line.
Manifests are stored as `key=value` lines. To load them back, use:

- `read_manifest`
- `read_namespace_records`
- `read_queries`

### Key-value schema

`nsbench.rocks_schema` encodes the namespace as a dentry/inode key-value
layout:

- Inode keys are `b"I"` followed by a big-endian 64-bit id.
- Directory-entry keys are `b"D"`, then the parent id, then the name.
- Values pack ids and a one-byte node type.

### Running a benchmark

`IterativeResolver` resolves a path one component at a time. At each step
it looks up the directory entry under the current inode, starting from
`root_inode_id`.

The key-value pairs are kept in an SQLite table. With an empty `db_path`
(the default) the table lives in memory. Otherwise it lives in the given
file, which `build` removes first when `destroy_if_exists` is set.

With `verify_inode_on_resolve` set, each successful resolve also reads the
target inode record. The resolver can be used as a context manager, or
closed with `close()`.

`BenchRunner` warms up the resolver and runs `repeats` timed passes. It
checks each result against the expected outcome, unless
`check_correctness` is off. Each pass reports:

- the average, p50, p95 and p99 latency
- the throughput
- the average depth and step counts

```python
from nsbench.bench_runner import BenchRunner, RunOptions
from nsbench.csv_writer import write_benchmark_reports_csv
from nsbench.iterative_resolver import IterativeResolver, IterativeResolverOptions

with IterativeResolver(IterativeResolverOptions()) as resolver:
    resolver.build(ds.records)
    report = BenchRunner().run(resolver, ds.manifest.depth, "positive",
                               ds.positive_queries, RunOptions(repeats=3))
write_benchmark_reports_csv([report], "results.csv")
```

`append_benchmark_reports_csv` adds rows to an existing CSV file. Other
resolvers can be plugged in by subclassing `nsbench.resolver.PathResolver`.

Failures raise `nsbench.types.BenchError`.

## File-system workloads

`nsbench.fs.workload.build_workload` spreads `target_file_count` files
across a balanced directory tree, using the depth and fan-out you give it.
It also draws seeded positive lookup queries and seeded negative lookup
queries. A negative query is an existing file name with `.missing`
appended:

```python
from nsbench.fs.workload import WorkloadOptions, build_workload, count_files

data = build_workload(WorkloadOptions(depth=3, siblings_per_dir=4,
                                      files_per_leaf=8, target_file_count=100))
count_files(data.entries)   # 100
```

`nsbench.fs.paths.prepare_path` normalises and splits paths for this part
of the package. `nsbench.fs.types.PathBackend` is the interface a backend
implements: `name`, `build`, `run` (one timed `OpKind` operation) and
`snapshot_memory`.

### Memory and caches

These parts read Linux `/proc` files:

- `nsbench.fs.slab.snapshot_slabs` reads `/proc/slabinfo`. Use
  `query_active_bytes` to get the active bytes of a named cache.
- `nsbench.fs.proc_mem.snapshot_self` reads `VmRSS` and `VmSize` from
  `/proc/self/status`.
- `parse_slabinfo` and `parse_proc_status` parse text you already have in
  hand.
- `nsbench.fs.cache_control.CacheController` syncs file systems and writes
  to `/proc/sys/vm/drop_caches`. Dropping caches needs root, and it is not
  available on Windows.

### Writing results

Use `nsbench.fs.csv_writer.write_memory_results` and `write_miss_results`
to write result rows to CSV. They create any missing parent directories.

Failures in `nsbench.fs` raise `nsbench.fs.types.FsBenchError`.

## What the package does not do

- It ships no concrete `PathBackend`. Nothing here builds a workload on a
  real file system or times `stat`, reads or writes against one. To do
  that, implement `PathBackend` yourself.
- It has no command-line programs. Everything is used from Python.