import logging
from typing import Union

from rich.logging import RichHandler

from fitbook.settings import Settings, get_settings


def log_level(settings: Settings) -> Union[int, str]:
    if settings.LOG_LEVEL is not None:
        return settings.LOG_LEVEL.upper()
    return logging.NOTSET if settings.IS_DEVELOPMENT else logging.INFO


logging.basicConfig(
    level=log_level(get_settings()),
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(markup=True, rich_tracebacks=True)],
)
# the scheduler reports every reminder tick at info level
logging.getLogger("apscheduler").setLevel(logging.WARNING)
log = logging.getLogger(__name__)
