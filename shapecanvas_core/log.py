"""Logging setup shared by the CLI and the API."""
from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_configured = False


def setup_logging(level: int | str = logging.INFO, log_dir: str | os.PathLike | None = None) -> None:
    """Attach a console handler (and a file handler when ``log_dir`` is set) to the root logger.

    Repeated calls only adjust the level.
    """
    global _configured
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level '{level}'")
        level = resolved

    root = logging.getLogger()
    root.setLevel(level)
    if _configured:
        return

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)

    if log_dir is not None:
        target = Path(log_dir)
        try:
            target.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(target / "shapecanvas.log", encoding="utf-8")
        except OSError as exc:
            logging.getLogger(__name__).warning("File logging disabled: %s", exc)
        else:
            handler.setFormatter(fmt)
            root.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["LOG_FORMAT", "setup_logging", "get_logger"]
