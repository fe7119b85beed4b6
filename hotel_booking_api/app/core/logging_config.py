"""
Logging setup for the hotel API.

Application modules log through ``logging.getLogger(__name__)``.  The
HTTP libraries used by image uploads (``urllib3`` underneath the
Cloudinary SDK) and the multipart form parser are chatty at INFO and
DEBUG, so they are held at WARNING unless the API itself runs at DEBUG.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("urllib3", "cloudinary", "python_multipart", "multipart")


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    noisy: Sequence[str] = NOISY_LOGGERS,
) -> None:
    """Configure the root logger and quiet the upload libraries.

    Root handlers are installed only on the first call; later calls,
    e.g. from ``create_app`` in tests, only adjust library levels.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    library_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in noisy:
        logging.getLogger(name).setLevel(library_level)

    if logging.getLogger().handlers:
        return
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
    )
