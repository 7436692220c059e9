"""
Logging helper shared by the GUI process, the bridge host and the receiver.
"""

import logging
from typing import Union

_DEFAULT_FMT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"

ROOT_LOGGER = "pose_osc"


def get_logger(
    name: str = ROOT_LOGGER,
    level: Union[str, int, None] = None,
    fmt: str = _DEFAULT_FMT,
    datefmt: str = _DEFAULT_DATEFMT,
) -> logging.Logger:
    """
    Return a logger under the ``pose_osc`` namespace.

    Only the root ``pose_osc`` logger gets a stream handler; child loggers
    propagate to it. Passing ``level`` also sets the level on the root logger.

    Usage:
        log = get_logger("pose_osc.transport")
        log.info("hello")
    """
    root = logging.getLogger(ROOT_LOGGER)

    if level is not None:
        lvl = level if isinstance(level, int) else getattr(logging, str(level).upper(), logging.INFO)
        root.setLevel(lvl)

    # Add handler only once
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        sh = logging.StreamHandler()
        sh.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
        root.addHandler(sh)

    return logging.getLogger(name)
