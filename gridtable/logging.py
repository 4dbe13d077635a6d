import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Attach a single stream handler to the root logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root = logging.getLogger()
    if not any(getattr(handler, "_gridtable", False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._gridtable = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level)
