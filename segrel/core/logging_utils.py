"""Logging utilities for segrel.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All segrel code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')
_ROOT_NAME = 'segrel'


def _ensure_segrel_root() -> logging.Logger:
    """Ensure the 'segrel' logger has a single stream handler and is isolated
    from the process root logger. Returns the 'segrel' logger.
    """
    segrel_root = logging.getLogger(_ROOT_NAME)
    # Only NullHandlers present (added by package __init__): replace with a StreamHandler
    has_non_null = any(not isinstance(h, logging.NullHandler) for h in segrel_root.handlers)
    if not has_non_null:
        for h in list(segrel_root.handlers):
            segrel_root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(_FORMAT)
        segrel_root.addHandler(handler)
    segrel_root.propagate = False
    return segrel_root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else default


def configure_logging(level: Union[str, int] = 'INFO', mute_external: bool = True) -> None:
    """Configure the 'segrel' logger family level and optional external noise suppression.

    This does NOT modify the process root logger.
    """
    segrel_root = _ensure_segrel_root()
    lvl = _to_level(level)
    segrel_root.setLevel(lvl)
    # matplotlib is chatty at DEBUG (font cache, backend selection)
    if mute_external and lvl <= logging.DEBUG:
        for noisy in ('matplotlib', 'matplotlib.font_manager'):
            logging.getLogger(noisy).setLevel(logging.INFO)


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'segrel' namespace.

    Without an explicit level the logger is left at NOTSET so it inherits from
    the 'segrel' parent configured via configure_logging().
    """
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + '.'):
        name = f'{_ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
