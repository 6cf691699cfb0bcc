import pytest
from pathlib import Path
import shutil
import tempfile
import sys

# Ensure src is in python path
sys.path.append(str(Path(__file__).parent.parent / "src"))

from navvi.config.config import NavviConfig  # noqa: E402
from navvi.tools.code_analyzer.models import ComplexityMetrics, ExportInfo, FileAnalysis, FunctionInfo  # noqa: E402


@pytest.fixture
def temp_workspace():
    """Create a temporary workspace directory"""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def sample_repo_path():
    """Return path to the sample JavaScript/TypeScript repo data"""
    return Path(__file__).parent / "data" / "sample_js_repo"


@pytest.fixture
def navvi_config(monkeypatch):
    """Default configuration, isolated from the developer's environment"""
    for var in (
        "NAVVI_EXTENSIONS",
        "NAVVI_IGNORE_PATTERNS",
        "NAVVI_MAX_FILE_SIZE",
        "NAVVI_COMPLEXITY_THRESHOLD",
        "NAVVI_MAX_WORKERS",
        "NAVVI_ENABLE_HISTORY",
        "GITHUB_TOKEN",
        "CLONE_DEPTH",
    ):
        monkeypatch.delenv(var, raising=False)
    return NavviConfig(_env_file=None)


@pytest.fixture
def make_file():
    """Factory for FileAnalysis records with a given complexity"""

    def _make(path, cyclomatic=1, lines=10, language=None, exports=(), functions=(), commit_count=None):
        return FileAnalysis(
            path=path,
            language=language or path.rsplit(".", 1)[-1],
            size=lines * 20,
            lines=lines,
            functions=[FunctionInfo(name=name, line=1, end_line=2) for name in functions],
            exports=[ExportInfo(name=name, line=1, kind="function") for name in exports],
            complexity=ComplexityMetrics(cyclomatic=cyclomatic, cognitive=cyclomatic),
            commit_count=commit_count,
        )

    return _make


@pytest.fixture(autouse=True)
def reset_navvi_logging():
    """Let records reach caplog even after a CLI test configured the package logger"""
    import logging
    from navvi.utils.logger import NavviLogger, ROOT_LOGGER_NAME

    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    NavviLogger._configured.clear()
