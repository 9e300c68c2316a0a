import logging

from church_admin.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    resolved = (level or settings.log_level).upper()
    if not root.handlers:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
    root.setLevel(resolved)
    # SQL echo is noisy at INFO; keep it opt-in.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
