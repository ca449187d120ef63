# === mockapi/core/logging_config.py ===
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQL statements are logged through SQL_ECHO instead
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
