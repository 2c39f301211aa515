"""
Root logger setup.

Modules log through ``logging.getLogger(__name__)``; this module only makes
sure a console handler exists. Calling ``setup_logging`` more than once is a
no-op, which keeps repeated app imports in tests quiet.
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Attach a console handler to the root logger if none is configured yet.

    ``level`` is a logging level name (case insensitive); unknown names fall
    back to INFO.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
