from sleep_progress import __version__

APP_NAME = 'sleep-progress'


def get_version() -> str:
    return __version__.__version__
