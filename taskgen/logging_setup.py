import logging
import sys
from pathlib import Path
from typing import Optional, Union


class _ConsoleNoiseFilter(logging.Filter):
    """Keep taskgen logs on the console; third-party loggers only at WARNING+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "taskgen" or record.name.startswith("taskgen."):
            return True
        if record.name.startswith("uvicorn"):
            return record.levelno >= logging.INFO
        return record.levelno >= logging.WARNING


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
) -> None:
    """Configure the root logger once, before the app starts serving.

    Console output is filtered; when ``log_dir`` is given, a file handler
    receives everything at DEBUG.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if log_dir else level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_dir / "taskgen.log"), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    logging.captureWarnings(True)
