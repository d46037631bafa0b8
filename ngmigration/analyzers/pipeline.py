"""End-to-end scan pipeline.

Order of work: build configuration, resolve files, scan them with a bounded
worker pool, apply findings in resolved order, count lines, freeze the
state and recommend. The recommendation only runs once both the findings
and the line count are complete.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path, PurePosixPath

from ngmigration.analyzers.aggregator import FindingsAggregator
from ngmigration.analyzers.configuration import build_configuration
from ngmigration.analyzers.detectors import Detector, build_detectors, is_scannable, scan_file
from ngmigration.analyzers.files import read_source, resolve_files
from ngmigration.analyzers.ignore import DEFAULT_IGNORE_FILENAME
from ngmigration.analyzers.recommendation import recommend
from ngmigration.analyzers.sloc import count_lines
from ngmigration.errors import FileReadError
from ngmigration.logging import ProgressBar, log_operation, logger
from ngmigration.models.migration import Finding, ScanConfiguration, ScanResult, SkippedFile


def _scan_one(root: Path, rel_path: str, detectors: list[Detector]) -> list[Finding]:
    content = read_source(root, rel_path)
    return scan_file(rel_path, content, detectors)


def _scan_files(
    config: ScanConfiguration,
    files: list[str],
    detectors: list[Detector],
    skipped: dict[str, SkippedFile],
    show_progress: bool,
) -> dict[str, list[Finding]]:
    """Scan files in parallel; results keyed by path for ordered reassembly."""
    results: dict[str, list[Finding]] = {}
    if not files:
        return results

    with ProgressBar(total=len(files), desc="Scanning", unit="files", disable=not show_progress) as pbar:
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            future_to_path = {
                executor.submit(_scan_one, config.root, rel_path, detectors): rel_path
                for rel_path in files
            }
            for future in as_completed(future_to_path):
                rel_path = future_to_path[future]
                try:
                    results[rel_path] = future.result()
                except FileReadError as e:
                    logger.warning("  Skipping %s: %s", rel_path, e.reason)
                    skipped[rel_path] = SkippedFile(path=rel_path, reason=e.reason)
                pbar.update()

    return results


def run_scan(config: ScanConfiguration, show_progress: bool = True) -> ScanResult:
    """Scan the application described by a configuration.

    Args:
        config: Scan configuration from build_configuration.
        show_progress: Show a progress bar on stderr while scanning.

    Returns:
        ScanResult with the frozen state and the recommendation.

    Raises:
        InvalidRootError: If the root is not a directory.
    """
    with log_operation("scan", {"root": config.root}):
        files = resolve_files(config.root, config.ignore_patterns)
        scannable = [rel_path for rel_path in files if is_scannable(rel_path, config)]
        logger.info("  Resolved %d files, %d to inspect", len(files), len(scannable))

        skipped: dict[str, SkippedFile] = {}
        detectors = build_detectors(config)
        results = _scan_files(config, scannable, detectors, skipped, show_progress)

        aggregator = FindingsAggregator()
        for rel_path in scannable:
            if rel_path in results:
                aggregator.apply(results[rel_path])

        def _record_skip(error: FileReadError) -> None:
            rel_path = error.path.as_posix()
            skipped.setdefault(rel_path, SkippedFile(path=rel_path, reason=error.reason))

        readable = [rel_path for rel_path in files if rel_path not in skipped]
        lines_of_code = count_lines(
            config.root, readable, config.inspect_extensions, on_error=_record_skip
        )
        logger.info("  Counted %d source lines", lines_of_code)

        # Manifests only carry version markers and do not count as inspected sources
        sources = [
            rel_path for rel_path in results
            if PurePosixPath(rel_path).suffix.lower() in config.inspect_extensions
        ]
        aggregator.record_file_counts(total=len(files), relevant=len(sources))
        aggregator.record_lines_of_code(lines_of_code)
        state = aggregator.freeze()

        recommendation = recommend(state)

    return ScanResult(
        configuration=config,
        state=state,
        recommendation=recommendation,
        skipped_files=list(skipped.values()),
    )


def scan_repository(
    root: str | Path,
    ignore_filename: str = DEFAULT_IGNORE_FILENAME,
    extra_ignores: list[str] | None = None,
    max_workers: int | None = None,
    show_progress: bool = True,
) -> ScanResult:
    """Scan an AngularJS application and recommend a migration path.

    Args:
        root: Application root directory.
        ignore_filename: Ignore file looked up at the root.
        extra_ignores: Additional ignore patterns.
        max_workers: Scanner pool size.
        show_progress: Show a progress bar on stderr while scanning.

    Returns:
        ScanResult with the frozen state and the recommendation.

    Raises:
        InvalidRootError: If root does not exist or is not a directory.
    """
    config = build_configuration(
        root,
        ignore_filename=ignore_filename,
        extra_ignores=extra_ignores,
        max_workers=max_workers,
    )
    return run_scan(config, show_progress=show_progress)
