"""Logging filter — masks structured log arguments before they are formatted.

Usage:

    masker = Masker(MaskerConfig(field_defaults={"password": "filled"}))
    handler.addFilter(MaskingFilter(masker))

    log.info("login %s", user)             # dataclass args are masked
    log.info("payload %(body)s", {"body": {"password": "hunter2"}})

String messages are left alone; only the values passed as arguments (and
a non-string ``msg`` object) go through the masker.  If masking raises,
the arguments are replaced with MASK_FAILED and the failure is logged on
this module's logger; the logging call itself never sees the exception.
"""

from __future__ import annotations
import logging
from collections.abc import Mapping

from .default import get_default_masker
from .masker import Masker

logger = logging.getLogger(__name__)

# Stands in for every argument of a record that could not be masked
MASK_FAILED = "<masking failed>"


class MaskingFilter(logging.Filter):
    """Filter that rewrites ``record.args`` and non-string ``record.msg``."""

    def __init__(self, masker: Masker | None = None, name: str = "") -> None:
        super().__init__(name)
        self._masker = masker

    @property
    def masker(self) -> Masker:
        return self._masker or get_default_masker()

    def filter(self, record: logging.LogRecord) -> bool:
        if not super().filter(record):
            return False
        try:
            args, msg = self._mask_record(record)
        except Exception as e:
            # never raise into the logging call; drop the values instead
            args, msg = self._redact_record(record)
            logger.error(
                "Could not mask log record from %s (%s:%d): %s",
                record.name, record.pathname, record.lineno, type(e).__name__,
            )
        record.args, record.msg = args, msg
        return True

    def _mask_record(self, record: logging.LogRecord):
        masker = self.masker
        args, msg = record.args, record.msg
        if args:
            if isinstance(args, Mapping):
                args = masker.mask(dict(args))
            else:
                args = tuple(masker.mask(list(args)))
        if not isinstance(msg, str):
            msg = masker.mask(msg)
        return args, msg

    def _redact_record(self, record: logging.LogRecord):
        args, msg = record.args, record.msg
        if args:
            if isinstance(args, Mapping):
                args = {k: MASK_FAILED for k in args}
            else:
                args = tuple(MASK_FAILED for _ in args)
        if not isinstance(msg, str):
            msg = MASK_FAILED
        return args, msg
