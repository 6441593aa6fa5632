"""Logging configuration."""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("urllib3", "werkzeug")


def setup_logging(log_dir: Optional[str] = "logs", level: Union[int, str] = logging.INFO) -> Optional[Path]:
    """Configure console logging, plus a timestamped file under ``log_dir``.

    Pass ``log_dir=None`` for console-only output. Returns the log file path.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handlers = [logging.StreamHandler()]
    log_file = None
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        log_file = log_path / f"portfolio_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT,
                        handlers=handlers, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.info("Logging initialized")
    if log_file:
        logging.info(f"Log file: {log_file}")
    return log_file
