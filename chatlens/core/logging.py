import logging

from chatlens.core.config import get_settings


class PrivacyFilter(logging.Filter):
    """Drop chat content from structured logs."""

    BLOCKED_KEYS = {"text", "body", "message_text", "raw_preview", "raw_content"}

    def filter(self, record: logging.LogRecord) -> bool:
        for key in self.BLOCKED_KEYS:
            if hasattr(record, key):
                setattr(record, key, "[REDACTED]")
        return True


def configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # Propagated records skip logger filters, so the handlers carry it too.
    root = logging.getLogger()
    for handler in root.handlers:
        if not any(isinstance(item, PrivacyFilter) for item in handler.filters):
            handler.addFilter(PrivacyFilter())
