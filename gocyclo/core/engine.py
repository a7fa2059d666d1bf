"""
Analysis engine for the complexity analyzer.

Expands the requested paths into Go files, parses and analyzes each file
(in parallel when there is more than one), and returns every complexity
record of the run in creation order.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import List, Optional, Sequence

from gocyclo.analysis.records import IdAllocator, build_records
from gocyclo.core.config import Config
from gocyclo.core.errors import UsageError
from gocyclo.core.record import ComplexityRecord
from gocyclo.parsing.treesitter import parse_file, parse_source
from gocyclo.utils.files import iter_source_files


logger = logging.getLogger(__name__)


class AnalysisEngine:
    """
    Computes complexity records for a set of Go files.

    The engine owns the run's IdAllocator, so record ids are unique across
    every file it analyzes, whichever worker thread produced them. A file
    that fails to parse aborts the whole run with ParseError.
    """

    def __init__(self, config: Optional[Config] = None, allocator: Optional[IdAllocator] = None):
        self.config = config or Config.load(None)
        self.allocator = allocator or IdAllocator()
        self.max_workers = self.config.jobs()
        self.exclude_patterns = self.config.exclude_patterns()

    def discover_files(self, paths: Sequence[str]) -> List[str]:
        if not paths:
            raise UsageError("no input paths given")
        return list(iter_source_files(paths, self.exclude_patterns))

    def analyze_file(self, file_path: str) -> List[ComplexityRecord]:
        parsed = parse_file(file_path)
        records = build_records(parsed, self.allocator)
        logger.debug(f"Analyzed {file_path} (package={parsed.package_name} functions={len(records)})")
        return records

    def analyze_source(self, source: str | bytes, file_path: str = "<input>") -> List[ComplexityRecord]:
        """
        Analyze Go source held in memory.

        Useful for editor integrations and testing.
        """
        if isinstance(source, str):
            source = source.encode("utf-8")
        return build_records(parse_source(source, file_path), self.allocator)

    def analyze(self, paths: Sequence[str]) -> List[ComplexityRecord]:
        """
        Analyze every Go file reachable from ``paths``.

        Args:
            paths: Files and directories to analyze.

        Returns:
            All records of the run, ordered by id.

        Raises:
            UsageError: No paths were given or a path does not exist.
            ParseError: A file is not valid Go; no records are returned.
        """
        start_time = time.time()
        files = self.discover_files(paths)

        if len(files) > 1 and self.max_workers > 1:
            records = self._analyze_parallel(files)
        else:
            records = []
            for file_path in files:
                records.extend(self.analyze_file(file_path))

        records.sort(key=lambda record: record.id)
        logger.info(
            f"Analyzed {len(files)} files, {len(records)} functions "
            f"in {time.time() - start_time:.3f}s"
        )
        return records

    def _analyze_parallel(self, files: List[str]) -> List[ComplexityRecord]:
        records: List[ComplexityRecord] = []
        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            futures = [executor.submit(self.analyze_file, f) for f in files]
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            failed = [f for f in futures if f in done and f.exception() is not None]
            if failed:
                executor.shutdown(wait=True, cancel_futures=True)
                raise failed[0].exception()
            for future in futures:
                records.extend(future.result())
        finally:
            executor.shutdown(wait=True)
        return records
