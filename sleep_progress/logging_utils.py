import logging

from rich.logging import RichHandler

from sleep_progress import console

_HANDLER_NAME = 'sleep_progress'


def setup_logging(debug: bool = False) -> logging.Logger:
    logger = logging.getLogger('sleep_progress')
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = RichHandler(
            console=console.stderr_console,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter('%(name)s: %(message)s'))
        logger.addHandler(handler)
    return logger
