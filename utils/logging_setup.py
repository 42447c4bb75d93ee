import logging
import sys

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Route application logs to stdout with a single formatter.

    Safe to call more than once; the root handler is replaced, not stacked.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(root.handlers):
        if getattr(handler, "_catalog_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._catalog_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
