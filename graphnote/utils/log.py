import logging


LOG_FORMAT = '%(levelname)s:%(name)s: %(message)s'


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure root logging for an editor host process."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        force=True
    )
