"""Generated upload fixtures on disk."""

import shutil
from dataclasses import dataclass
from pathlib import Path

from herokuapp_e2e.monitoring.logger import get_logger

logger = get_logger(__name__)

BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class TestFile:
    """A generated file identified by directory, name and size."""

    __test__ = False  # not a pytest test class

    directory: Path
    name: str
    size_mb: float

    @property
    def path(self) -> Path:
        return Path(self.directory) / self.name

    @property
    def size_bytes(self) -> int:
        return int(self.size_mb * BYTES_PER_MB)

    def exists(self) -> bool:
        return self.path.is_file()


def create_file(directory: str | Path, name: str, size_mb: float) -> TestFile:
    """Create a file of exactly size_mb megabytes.

    The file is sparse where the filesystem supports it, so even large
    fixtures are cheap to produce.

    Args:
        directory: Target directory (created if missing)
        name: File name
        size_mb: Size in megabytes (1 MB = 1024 * 1024 bytes)

    Returns:
        TestFile describing the created file
    """
    if size_mb < 0:
        raise ValueError("size_mb must be >= 0")

    test_file = TestFile(directory=Path(directory), name=name, size_mb=size_mb)
    test_file.path.parent.mkdir(parents=True, exist_ok=True)

    with open(test_file.path, "wb") as fh:
        fh.truncate(test_file.size_bytes)

    logger.info(f"Test file created | path={test_file.path} | size={test_file.size_bytes}B")
    return test_file


def cleanup_directory(directory: str | Path) -> bool:
    """Delete a fixture directory and everything in it.

    Args:
        directory: Directory to remove

    Returns:
        True if something was removed
    """
    directory = Path(directory)
    if not directory.exists():
        return False
    shutil.rmtree(directory)
    logger.info(f"Test files cleaned up | directory={directory}")
    return True


def is_file_available(directory: str | Path, name: str) -> bool:
    return (Path(directory) / name).is_file()
