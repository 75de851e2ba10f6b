"""Structured logging for dupfinder.

Modules log through ``get_logger(__name__, component=...)`` and pass
structured fields via ``extra`` (always including an ``event`` name).
"""

import logging
from typing import Optional, Union

from .context import log_context, new_search_id


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """Tags every record with the emitting component; per-call extras take precedence."""

    def process(self, msg, kwargs):
        kwargs["extra"] = dict(self.extra, **kwargs.get("extra", {}))
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Return the named logger, wrapped to add ``component`` when one is given."""
    logger = logging.getLogger(name)
    if component is None:
        return logger
    return ComponentLoggerAdapter(logger, {"component": component})


__all__ = ["ComponentLoggerAdapter", "get_logger", "log_context", "new_search_id"]
