"""Root logger setup shared by the application wrapper and tooling."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Per-request loggers of the aiohttp health endpoint.
HTTP_LOGGERS = ("aiohttp.access", "aiohttp.server")


def configure_logging(
    level: str = "INFO", *, log_path: Optional[Path] = None, log_backend: bool = False
) -> None:
    """Send wifi-direct logs to the console and, optionally, to a file.

    Handlers already attached to the root logger are replaced, so calling
    this again (for example after reloading configuration) does not duplicate
    output. Unknown level names fall back to INFO.

    Unless ``log_backend`` is set, the health endpoint's per-request loggers
    only emit warnings.
    """

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    logging.captureWarnings(True)
    logging.basicConfig(
        level=logging.getLevelNamesMapping().get(level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )

    if log_path is not None:
        log_path = Path(log_path).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    http_level = logging.NOTSET if log_backend else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
