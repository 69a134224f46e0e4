"""Root logger setup for command-line use."""
import logging
from typing import Optional

from rich.logging import RichHandler

from locintel.config import settings


def configure(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_time=False, show_path=False)],
    )
