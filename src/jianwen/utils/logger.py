"""Logger namespacing for Jianwen.

Every module logs through a child of the ``jianwen`` logger, so callers
can enable parser diagnostics with one call:

    >>> import logging
    >>> logging.getLogger("jianwen").setLevel(logging.DEBUG)

The package root carries a NullHandler; nothing is printed unless the
application configures logging.

Example:
    >>> from jianwen.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Expanding include %s", "chapter.jw")
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "jianwen"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` under the ``jianwen`` namespace.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> get_logger("mymodule").name
        'jianwen.mymodule'
        >>> get_logger("jianwen.parser").name
        'jianwen.parser'
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
