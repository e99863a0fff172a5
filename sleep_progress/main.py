import sys

import typer
from rich.console import Console


def _abort():
    Console().show_cursor()
    sys.exit(130)


def run_app_cli():
    from sleep_progress.cli import app as app_cli

    app_cli(prog_name='sleep-progress')


def app():
    from sleep_progress.exception import SleepProgressException

    try:
        run_app_cli()
    except (KeyboardInterrupt, typer.Abort):
        _abort()
    except SystemExit as e:
        if e.code == 130:
            _abort()
        else:
            raise
    except SleepProgressException as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    finally:
        Console().show_cursor()


if __name__ == '__main__':
    app()
