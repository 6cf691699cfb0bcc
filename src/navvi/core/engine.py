"""
Analysis Engine
Runs one repository through fetch, parse, group, measure and synthesize.
"""
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Dict

from navvi.config.config import NavviConfig, get_config
from navvi.core.analysis_store import AnalysisStore
from navvi.core.exceptions import (
    AnalysisCancelledError,
    AnalysisError,
    FileReadError,
    InternalAggregationError,
    InvalidStageTransitionError,
    ParseError,
)
from navvi.tools.code_analyzer.component_grouper import ComponentGrouper
from navvi.tools.code_analyzer.insights import InsightsGenerator
from navvi.tools.code_analyzer.models import AnalysisProgress, FileAnalysis, RepositoryAnalysis
from navvi.tools.code_analyzer.parsers import Dialect, get_parser
from navvi.tools.code_analyzer.scanner import FileScanner
from navvi.tools.metrics import MetricsAnalyzer
from navvi.tools.repo_manager import AutoFetcher, GitRepositoryFetcher, RepositoryFetcher

logger = logging.getLogger(__name__)

STAGES = ("cloning", "parsing", "analyzing", "generating", "complete")

ProgressCallback = Callable[[AnalysisProgress], None]


class CommitHistoryProvider(Protocol):
    def history(self, root: Path) -> Dict[str, int]:
        ...


class StageTracker:
    """
    Enforces the stage order. Each stage is entered exactly once, in order.
    """

    def __init__(self, emit: Callable[[AnalysisProgress], None]):
        self._emit = emit
        self.current: Optional[str] = None

    def advance(self, stage: str, percent: float, message: str):
        expected_index = 0 if self.current is None else STAGES.index(self.current) + 1
        if stage not in STAGES or STAGES.index(stage) != expected_index:
            raise InvalidStageTransitionError(self.current or "start", stage)
        self.current = stage
        self._emit(AnalysisProgress(stage=stage, percent=percent, message=message))

    def report(self, percent: float, message: str, current_file: Optional[str] = None):
        """Progress within the current stage"""
        self._emit(AnalysisProgress(
            stage=self.current, percent=percent, message=message, current_file=current_file
        ))


class AnalysisEngine:
    """
    Main entry point for repository analysis.

    Args:
        config: Settings (global config when None)
        fetcher: Produces a local checkout for an identifier; defaults to
            cloning URLs and serving local directories as-is
        history_provider: Optional per-file commit counts
        store: Optional cache receiving every finished analysis
        progress_callback: Receives an AnalysisProgress per event
        grouper: Component grouper (default pattern detectors when None)
    """

    def __init__(
        self,
        config: Optional[NavviConfig] = None,
        fetcher: Optional[RepositoryFetcher] = None,
        history_provider: Optional[CommitHistoryProvider] = None,
        store: Optional[AnalysisStore] = None,
        progress_callback: Optional[ProgressCallback] = None,
        grouper: Optional[ComponentGrouper] = None,
    ):
        self.config = config or get_config()
        self.fetcher = fetcher or AutoFetcher(GitRepositoryFetcher(
            clone_depth=self.config.git.clone_depth,
            token=self.config.git.github_token,
            temp_root=self.config.temp_root,
        ))
        self.history_provider = history_provider
        self.store = store
        self.progress_callback = progress_callback
        self.scanner = FileScanner(self.config.analysis.to_scan_config())
        self.grouper = grouper or ComponentGrouper()
        threshold = self.config.analysis.complexity_threshold
        self.metrics_analyzer = MetricsAnalyzer(threshold)
        self.insights_generator = InsightsGenerator(threshold)

    def _emit(self, progress: AnalysisProgress):
        logger.debug(f"[{progress.stage}] {progress.percent:.0f}% {progress.message}")
        if self.progress_callback:
            self.progress_callback(progress)

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event]):
        if cancel_event is not None and cancel_event.is_set():
            raise AnalysisCancelledError("Analysis cancelled")

    def analyze_repository(self, identifier: str, cancel_event: Optional[threading.Event] = None) -> RepositoryAnalysis:
        """
        Analyze one repository.

        Raises:
            AnalysisCancelledError: if ``cancel_event`` is set during the run
            AnalysisError: for any run-level failure, with the cause chained
        """
        tracker = StageTracker(self._emit)
        checkout: Optional[Path] = None
        started = time.perf_counter()

        try:
            tracker.advance("cloning", 0, f"Fetching {identifier}")
            self._check_cancelled(cancel_event)
            checkout = self.fetcher.fetch(identifier)
            self._check_cancelled(cancel_event)

            tracker.advance("parsing", 10, "Scanning source files")
            paths = self.scanner.scan(checkout)
            files = self._analyze_files(paths, checkout, tracker, cancel_event)
            self._apply_history(files, checkout)
            self._check_cancelled(cancel_event)

            tracker.advance("analyzing", 70, "Grouping components and computing metrics")
            try:
                architecture = self.grouper.group(files)
                metrics = self.metrics_analyzer.calculate(files)
            except Exception as e:
                raise InternalAggregationError(f"Aggregation failed: {e}") from e
            self._check_cancelled(cancel_event)

            tracker.advance("generating", 90, "Generating insights")
            try:
                insights = self.insights_generator.generate(files, architecture, metrics)
            except Exception as e:
                raise InternalAggregationError(f"Insight generation failed: {e}") from e

            analysis = RepositoryAnalysis(
                repository=identifier,
                files=files,
                architecture=architecture,
                metrics=metrics,
                insights=insights,
            )
            tracker.advance("complete", 100, "Analysis complete")
        except AnalysisCancelledError:
            logger.info(f"Analysis of {identifier} cancelled during {tracker.current}")
            raise
        except Exception as e:
            stage = tracker.current or STAGES[0]
            logger.error(f"Analysis of {identifier} failed during {stage}: {e}")
            raise AnalysisError(identifier, stage, e) from e
        finally:
            if checkout is not None:
                self.fetcher.release(checkout)

        if self.store is not None:
            self.store.put(identifier, analysis)

        elapsed = time.perf_counter() - started
        logger.info(
            f"Analyzed {identifier}: {len(analysis.files)} files, "
            f"{len(analysis.architecture.components)} components in {elapsed:.2f}s"
        )
        return analysis

    def _analyze_files(
        self,
        paths: List[Path],
        root: Path,
        tracker: StageTracker,
        cancel_event: Optional[threading.Event],
    ) -> List[FileAnalysis]:
        total = len(paths)
        results: List[FileAnalysis] = []

        def report(done: int, path: Path):
            tracker.report(10 + 60 * done / total, f"Analyzed {done}/{total} files", current_file=str(path))

        workers = max(1, self.config.analysis.max_workers)
        if workers == 1 or total < 2:
            for done, path in enumerate(paths, start=1):
                self._check_cancelled(cancel_event)
                analysis = self._analyze_file(path, root)
                if analysis is not None:
                    results.append(analysis)
                report(done, path)
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {executor.submit(self._analyze_file, path, root): path for path in paths}
                try:
                    for done, future in enumerate(as_completed(futures), start=1):
                        self._check_cancelled(cancel_event)
                        analysis = future.result()
                        if analysis is not None:
                            results.append(analysis)
                        report(done, futures[future])
                except AnalysisCancelledError:
                    for future in futures:
                        future.cancel()
                    raise

        results.sort(key=lambda f: f.path)
        skipped = total - len(results)
        if skipped:
            logger.warning(f"Skipped {skipped} of {total} files that could not be analyzed")
        return results

    def _analyze_file(self, path: Path, root: Path) -> Optional[FileAnalysis]:
        dialect = Dialect.from_path(path)
        if dialect is None:
            logger.debug(f"No parser for {path}")
            return None
        try:
            return get_parser(dialect).parse_file(path, root)
        except (FileReadError, ParseError) as e:
            logger.warning(f"Skipping file: {e.message}")
            return None
        except Exception as e:
            logger.warning(f"Skipping file {path}: unexpected {type(e).__name__}: {e}")
            return None

    def _apply_history(self, files: List[FileAnalysis], root: Path):
        if self.history_provider is None or not self.config.git.enable_history:
            return
        try:
            counts = self.history_provider.history(root)
        except Exception as e:
            logger.warning(f"Commit history unavailable for {root}: {e}")
            return
        for file in files:
            file.commit_count = counts.get(file.path, 0)
