# services/logging_config.py
import logging


def setup_logging(level: str = "INFO") -> None:
    """
    Attach a console handler to the root logger once.
    Repeated calls (tests, reloads) only adjust the level.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)
