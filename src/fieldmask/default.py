"""Process-wide default masker behind the module-level functions.

Created on first use with built-in transforms and default settings.
"""

from __future__ import annotations
import logging
import threading

from .masker import Masker, MaskerConfig

logger = logging.getLogger(__name__)

# Lazy singleton — nothing is built until the first module-level call
_masker: Masker | None = None
_lock = threading.Lock()


def get_default_masker() -> Masker:
    """Lazy-init the default masker."""
    global _masker
    if _masker is None:
        with _lock:
            if _masker is None:
                _masker = Masker(MaskerConfig())
                logger.debug("Created default masker")
    return _masker


def set_default_masker(masker: Masker | None) -> None:
    """Replace the default masker; None drops it so the next call rebuilds."""
    global _masker
    with _lock:
        _masker = masker
