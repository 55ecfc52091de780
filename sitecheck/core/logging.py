import logging
from rich.logging import RichHandler

_CONFIGURED = False

def setup(level: str = "WARNING") -> logging.Logger:
    lvl = getattr(logging, level.upper(), logging.WARNING)
    global _CONFIGURED
    if not _CONFIGURED:
        logging.basicConfig(
            level=lvl,
            format="%(threadName)s %(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        )
        _CONFIGURED = True
    else:
        logging.getLogger().setLevel(lvl)
    return logging.getLogger("sitecheck")
