"""
File Scanner
Walks a checkout and collects candidate source files.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Set, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanConfig:
    extensions: Tuple[str, ...] = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx")
    ignore_patterns: Tuple[str, ...] = ("node_modules", ".git", "dist", "build")
    max_file_size: int = 1024 * 1024


class FileScanner:
    """
    Depth-first directory walker.

    Ignored directories are pruned, so nothing below them is ever listed.
    Real paths of visited directories are remembered to break symlink cycles.
    """

    def __init__(self, config: ScanConfig = ScanConfig()):
        self.config = config

    def scan(self, root: Path) -> List[Path]:
        root = Path(root)
        results: List[Path] = []
        visited: Set[str] = set()
        self._walk(root, root, results, visited)
        logger.debug(f"Scanned {root}: {len(results)} candidate files")
        return results

    def _is_ignored(self, name: str, rel_path: str) -> bool:
        return any(
            name == pattern or pattern in rel_path
            for pattern in self.config.ignore_patterns
        )

    def _walk(self, root: Path, directory: Path, results: List[Path], visited: Set[str]):
        real = os.path.realpath(directory)
        if real in visited:
            logger.debug(f"Skipping already visited directory {directory}")
            return
        visited.add(real)

        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Cannot list directory {directory}: {e}")
            return

        for entry in entries:
            try:
                if entry.is_dir():
                    rel_path = Path(os.path.relpath(entry.path, root)).as_posix()
                    if self._is_ignored(entry.name, rel_path):
                        logger.debug(f"Ignoring directory: {entry.path}")
                        continue
                    self._walk(root, Path(entry.path), results, visited)
                elif entry.is_file():
                    if Path(entry.name).suffix.lower() not in self.config.extensions:
                        continue
                    size = entry.stat().st_size
                    if size > self.config.max_file_size:
                        logger.debug(f"Skipping oversized file {entry.path} ({size} bytes)")
                        continue
                    results.append(Path(entry.path))
            except OSError as e:
                logger.warning(f"Cannot stat {entry.path}: {e}")


def to_repo_path(file_path: Path, repo_root: Path) -> str:
    """Forward-slash path of ``file_path`` relative to ``repo_root``."""
    try:
        return Path(file_path).relative_to(repo_root).as_posix()
    except ValueError:
        return Path(os.path.relpath(file_path, repo_root)).as_posix()
