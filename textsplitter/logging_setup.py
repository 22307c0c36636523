import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


def setup_logging(log_dir: Optional[Path] = None, log_name: str = "textsplitter.log", *, level: int = logging.INFO, force: bool = False) -> None:
    """Configure root logging.

    Args:
        log_dir: directory for log file; console only when None
        log_name: file name
        level: base log level (WARNING by default on the CLI, DEBUG for verbose)
        force: if True, existing handlers are removed and reconfigured
    """
    logger = logging.getLogger()
    if logger.handlers and not force:
        # Already configured and not forcing reconfiguration
        return
    if force:
        for h in list(logger.handlers):
            logger.removeHandler(h)
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler (stderr, so chunk output on stdout stays clean)
    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    fh = RotatingFileHandler(log_dir / log_name, maxBytes=2 * 1024 * 1024, backupCount=3)
    fh.setLevel(level)
    fh.setFormatter(formatter)
    logger.addHandler(fh)


def level_from_name(name: Optional[str], default: int = logging.WARNING) -> int:
    """Map a level name such as "info" to its numeric value."""
    if not name:
        return default
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default
