# logging_utils.py
import logging
import sys
import threading
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path
from typing import Any

from loguru import logger

# NOTE: loguru internal helper; stdlib file birth time is not portable and
# rotation age needs a cross-platform creation time.
from loguru._ctime_functions import get_ctime

LOG_ROTATION_SIZE_BYTES = 10 * 1024 * 1024
LOG_ROTATION_MAX_AGE = timedelta(days=7)
LOG_RETENTION_MAX_FILES = 20
DEFAULT_LOG_FILENAME = "hifi-audio-data.log"
RotationRule = str | int | float | timedelta | Callable[[Any, Any], bool]
RetentionRule = str | int | float | timedelta | Callable[[list[Any]], Any]


class SizeOrAgeRotation:
    """Rotate when the file exceeds a size or has existed for too long.

    The age baseline is the file's creation time, so it survives restarts.
    """

    def __init__(
        self,
        max_bytes: int = LOG_ROTATION_SIZE_BYTES,
        max_age: timedelta = LOG_ROTATION_MAX_AGE,
    ) -> None:
        self.max_bytes = max_bytes
        self.max_age = max_age
        self._lock = threading.Lock()
        self._started: float | None = None

    def reset(self) -> None:
        with self._lock:
            self._started = None

    @property
    def started(self) -> float | None:
        with self._lock:
            return self._started

    def __call__(self, message: Any, file: Any) -> bool:
        record_ts = message.record["time"].timestamp()
        path = _resolve_log_path(file)
        with self._lock:
            if self._started is None:
                self._started = _file_start_time(path, record_ts)

            try:
                size = path.stat().st_size
            except (OSError, TypeError, ValueError) as exc:
                logger.debug(f"Rotation check skipped; stat failed: {exc}")
                return False

            if (
                size >= self.max_bytes
                or record_ts - self._started >= self.max_age.total_seconds()
            ):
                self._started = record_ts
                return True
            return False


def _resolve_log_path(file: Any) -> Path:
    """Return a Path for loguru file handles, path strings and Path objects."""

    if isinstance(file, Path):
        return file

    name = getattr(file, "name", file)
    try:
        return Path(name)
    except (OSError, TypeError, ValueError):
        return Path(str(name))


def _file_start_time(path: Path, record_ts: float) -> float:
    try:
        return get_ctime(str(path))
    except (OSError, ValueError) as exc:
        logger.debug(f"get_ctime failed for {path}: {exc}")
        return record_ts


class InterceptHandler(logging.Handler):
    """Redirect stdlib logging to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except (ValueError, TypeError):
            level = record.levelno

        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def keep_newest_logs(logs: list[Any]) -> None:
    """
    Retention policy: delete all but the newest LOG_RETENTION_MAX_FILES files.

    Args:
        logs: Paths (string or Path) of rotated log files.
    """

    dated: list[tuple[float, Path]] = []
    for path in logs:
        try:
            p = Path(path)
            dated.append((p.stat().st_mtime, p))
        except (OSError, TypeError, ValueError):
            continue

    dated.sort(key=lambda item: item[0], reverse=True)
    for _, path in dated[LOG_RETENTION_MAX_FILES:]:
        try:
            path.unlink()
        except OSError as exc:
            logger.debug(f"Retention skip for {path}: {exc}")


def configure_logging(
    log_dir: Path | str | None,
    console_level: str = "WARNING",
    console_json: bool = False,
    rotation: RotationRule | None = None,
    retention: RetentionRule | None = None,
) -> Path | None:
    """
    Initialize the console sink and an optional rotated JSON file sink.

    Without explicit rules the file rotates at 10 MB or 7 days and the newest
    20 files are kept.

    Args:
        log_dir: Directory for `hifi-audio-data.log`; enables the file sink when set.
        console_level: Console level string (e.g., INFO/DEBUG).
        console_json: Emit console as JSON when True; otherwise colored text.
        rotation: loguru rotation rule (e.g., '10 MB', '1 day') or callable.
        retention: loguru retention rule (e.g., '1 week', 5) or callable.

    Returns:
        Path of the log file, or None when file logging is disabled.
    """
    logger.remove()

    console_kwargs: dict[str, Any] = {
        "level": console_level.upper(),
        "serialize": console_json,
        "backtrace": False,
        "diagnose": False,
    }
    if not console_json:
        console_kwargs["format"] = (
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan> | {message}"
        )

    logger.add(sys.stderr, **console_kwargs)

    log_file: Path | None = None
    if log_dir is not None:
        log_dir_path = Path(log_dir)
        try:
            log_dir_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error(f"Failed to create log directory {log_dir_path}: {exc}")
        else:
            log_file = log_dir_path / DEFAULT_LOG_FILENAME
            logger.add(
                log_file,
                level="DEBUG",
                serialize=True,
                rotation=rotation if rotation is not None else SizeOrAgeRotation(),
                retention=retention if retention is not None else keep_newest_logs,
                backtrace=False,
                diagnose=False,
            )
            logger.info(f"File logging enabled at {log_file}")

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.NOTSET, force=True)
    logging.captureWarnings(True)
    return log_file
