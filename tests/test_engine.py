"""
Tests for the analysis engine, file discovery, configuration and reporting.
"""

import io
import json
import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gocyclo.core.config import Config, find_config
from gocyclo.core.engine import AnalysisEngine
from gocyclo.core.errors import ConfigError, ParseError, UsageError
from gocyclo.core.record import ComplexityRecord, Position
from gocyclo.reporting import (
    average,
    format_average,
    format_json,
    sort_records,
    write_records,
    write_report,
)
from gocyclo.utils.files import iter_source_files


GO_FILE_TEMPLATE = '''package {package}

func {name}One(a, b bool) int {{
	if a && b {{
		return 1
	}}
	return 0
}}

func {name}Two() {{}}
'''


def _write_go(directory, filename, package="demo", name="F"):
    path = directory / filename
    path.write_text(GO_FILE_TEMPLATE.format(package=package, name=name), encoding="utf-8")
    return str(path)


def _record(complexity, id, name=None):
    position = Position("x.go", id, 1)
    return ComplexityRecord(
        package_name="demo",
        function_name=name or f"F{id}",
        complexity=complexity,
        start=position,
        end=position,
        id=id,
    )


class TestAnalysisEngine:
    """Tests for the main analysis engine."""

    def test_engine_creation(self):
        engine = AnalysisEngine()
        assert engine.max_workers == 4
        assert engine.exclude_patterns == []

    def test_analyze_source(self):
        engine = AnalysisEngine()
        records = engine.analyze_source("package demo\n\nfunc F(a bool) { if a {} }\n")
        assert len(records) == 1
        assert records[0].complexity == 2
        assert records[0].start.file == "<input>"

    def test_analyze_single_file(self, tmp_path):
        path = _write_go(tmp_path, "a.go")
        records = AnalysisEngine().analyze([path])

        assert [(r.function_name, r.complexity, r.id) for r in records] == [
            ("FOne", 3, 1),
            ("FTwo", 1, 2),
        ]

    def test_parallel_ids_are_unique_and_gapless(self, tmp_path):
        """Files analyzed on several workers still get ids 1..N."""
        for i in range(12):
            _write_go(tmp_path, f"f{i:02d}.go", name=f"F{i}")
        engine = AnalysisEngine(Config.load(None).with_overrides(jobs=4))

        records = engine.analyze([str(tmp_path)])

        assert len(records) == 24
        assert [r.id for r in records] == list(range(1, 25))
        # Within one file, ids follow declaration order.
        by_file = {}
        for r in records:
            by_file.setdefault(r.start.file, []).append(r)
        for file_records in by_file.values():
            assert [r.function_name[-3:] for r in file_records] == ["One", "Two"]
            assert file_records[0].id < file_records[1].id

    def test_sequential_matches_parallel(self, tmp_path):
        for i in range(3):
            _write_go(tmp_path, f"f{i}.go", name=f"F{i}")
        sequential = AnalysisEngine(Config.load(None).with_overrides(jobs=1)).analyze([str(tmp_path)])
        parallel = AnalysisEngine(Config.load(None).with_overrides(jobs=3)).analyze([str(tmp_path)])

        assert sorted((r.function_name, r.complexity) for r in sequential) == sorted(
            (r.function_name, r.complexity) for r in parallel
        )

    def test_parse_error_aborts_run(self, tmp_path):
        for i in range(5):
            _write_go(tmp_path, f"good{i}.go", name=f"G{i}")
        bad = tmp_path / "bad.go"
        bad.write_text("package demo\n\nfunc broken( {\n", encoding="utf-8")

        with pytest.raises(ParseError) as exc_info:
            AnalysisEngine().analyze([str(tmp_path)])
        assert exc_info.value.path == str(bad)

    def test_parse_error_single_worker(self, tmp_path):
        bad = tmp_path / "bad.go"
        bad.write_text("package demo\n\nfunc broken( {\n", encoding="utf-8")
        engine = AnalysisEngine(Config.load(None).with_overrides(jobs=1))

        with pytest.raises(ParseError):
            engine.analyze([str(tmp_path)])

    def test_no_paths(self):
        with pytest.raises(UsageError):
            AnalysisEngine().analyze([])

    def test_missing_path(self, tmp_path):
        with pytest.raises(UsageError):
            AnalysisEngine().analyze([str(tmp_path / "missing.go")])


class TestFileDiscovery:
    """Tests for expanding paths into Go files."""

    def test_directory_walk_only_go_files(self, tmp_path):
        _write_go(tmp_path, "a.go")
        (tmp_path / "README.md").write_text("# demo\n", encoding="utf-8")
        sub = tmp_path / "pkg"
        sub.mkdir()
        _write_go(sub, "b.go")

        files = list(iter_source_files([str(tmp_path)]))

        assert [os.path.relpath(f, tmp_path) for f in files] == ["a.go", os.path.join("pkg", "b.go")]

    def test_walk_is_lexical_across_directories(self, tmp_path):
        """Subdirectories interleave with files by name."""
        sub = tmp_path / "a"
        sub.mkdir()
        _write_go(sub, "x.go")
        _write_go(tmp_path, "b.go")
        _write_go(tmp_path, "0.go")

        files = list(iter_source_files([str(tmp_path)]))

        assert [os.path.relpath(f, tmp_path) for f in files] == [
            "0.go",
            os.path.join("a", "x.go"),
            "b.go",
        ]

    def test_extension_match_is_case_sensitive(self, tmp_path):
        _write_go(tmp_path, "a.go")
        _write_go(tmp_path, "UPPER.GO")

        files = list(iter_source_files([str(tmp_path)]))

        assert [os.path.basename(f) for f in files] == ["a.go"]

    def test_explicit_file_kept_regardless_of_extension(self, tmp_path):
        path = tmp_path / "script.txt"
        path.write_text("package demo\n", encoding="utf-8")
        assert list(iter_source_files([str(path)])) == [str(path)]

    def test_exclude_patterns(self, tmp_path):
        _write_go(tmp_path, "a.go")
        _write_go(tmp_path, "a_test.go")
        vendor = tmp_path / "vendor"
        vendor.mkdir()
        _write_go(vendor, "dep.go")

        files = list(iter_source_files([str(tmp_path)], ["vendor/**", "*_test.go"]))

        assert [os.path.basename(f) for f in files] == ["a.go"]


class TestReporting:
    """Tests for ranking, filtering and averages."""

    def test_sort_is_descending_and_stable(self):
        records = [_record(2, 1), _record(5, 2), _record(2, 3), _record(5, 4), _record(1, 5)]
        assert [r.id for r in sort_records(records)] == [2, 4, 1, 3, 5]

    def test_over_threshold_filter(self):
        out = io.StringIO()
        written = write_records(out, sort_records([_record(5, 1), _record(2, 2)]), over=3)

        assert written == 1
        assert out.getvalue().splitlines()[0].startswith("5 demo F1 ")

    def test_threshold_is_exclusive(self):
        out = io.StringIO()
        assert write_records(out, [_record(3, 1)], over=3) == 0
        assert out.getvalue() == ""

    def test_top_limit(self):
        out = io.StringIO()
        records = sort_records([_record(c, i + 1) for i, c in enumerate([4, 9, 1, 7])])

        written = write_records(out, records, top=2)

        assert written == 2
        assert [line.split()[0] for line in out.getvalue().splitlines()] == ["9", "7"]

    def test_top_zero_reports_nothing(self):
        out = io.StringIO()
        assert write_records(out, [_record(4, 1)], top=0) == 0

    def test_average(self):
        records = [_record(1, 1), _record(3, 2), _record(2, 3)]
        assert average(records) == 2
        assert format_average(average(records)) == "Average: 2.00"

    def test_average_without_records(self):
        assert average([]) is None
        line = format_average(average([]))
        assert "no data" in line
        assert "0" not in line
        assert "nan" not in line.lower()

    def test_report_average_covers_all_records(self):
        out = io.StringIO()
        records = [_record(5, 1), _record(2, 2)]

        written = write_report(out, records, over=3, show_average=True)

        lines = out.getvalue().splitlines()
        assert written == 1
        assert lines[-1] == "Average: 3.50"

    def test_json_report(self):
        out = io.StringIO()
        records = [_record(5, 1), _record(2, 2)]

        written = write_report(out, records, top=1, show_average=True, fmt="json")

        data = json.loads(out.getvalue())
        assert written == 1
        assert data["summary"] == {"total": 2, "reported": 1, "average": 3.5}
        assert data["functions"][0]["function"] == "F1"
        assert data["functions"][0]["start"] == {"file": "x.go", "line": 1, "column": 1}

    def test_json_average_no_data(self):
        data = json.loads(format_json([], [], show_average=True))
        assert data["summary"]["average"] is None


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self):
        config = Config.load(None)
        assert config.over() == 0
        assert config.top() is None
        assert config.show_average() is False
        assert config.jobs() == 4
        assert config.output_format() == "text"

    def test_yaml_file(self, tmp_path):
        path = tmp_path / ".gocyclo.yaml"
        path.write_text("over: 10\ntop: 5\navg: true\nexclude:\n  - vendor/**\n", encoding="utf-8")

        config = Config.load(str(path))

        assert config.over() == 10
        assert config.top() == 5
        assert config.show_average() is True
        assert config.exclude_patterns() == ["vendor/**"]

    def test_json_file(self, tmp_path):
        path = tmp_path / "gocyclo.json"
        path.write_text(json.dumps({"jobs": 2, "format": "json"}), encoding="utf-8")

        config = Config.load(str(path))

        assert config.jobs() == 2
        assert config.output_format() == "json"
        assert config.over() == 0

    def test_overrides_skip_none(self):
        config = Config.load(None).with_overrides(over=7, top=None)
        assert config.over() == 7
        assert config.top() is None

    def test_negative_top_is_unbounded(self):
        assert Config.load(None).with_overrides(top=-1).top() is None

    def test_invalid_values(self, tmp_path):
        with pytest.raises(ConfigError):
            Config.load(None).with_overrides(format="xml")
        with pytest.raises(ConfigError):
            Config.load(None).with_overrides(jobs=0)
        path = tmp_path / "bad.yaml"
        path.write_text("over: lots\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.load(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            Config.load(str(tmp_path / "nope.yaml"))

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "latin1.yaml"
        path.write_bytes(b"over: \xff\n")
        with pytest.raises(ConfigError):
            Config.load(str(path))
        with pytest.raises(ConfigError):
            Config.load(str(tmp_path))

    def test_avg_must_be_boolean(self, tmp_path):
        path = tmp_path / "avg.yaml"
        path.write_text('avg: "no"\n', encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.load(str(path))
        assert Config.load(None).with_overrides(avg=True).show_average() is True

    def test_find_config_searches_parents(self, tmp_path):
        (tmp_path / ".gocyclo.yml").write_text("over: 1\n", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config(str(nested)) == str((tmp_path / ".gocyclo.yml").resolve())
