import asyncio
from typing import Annotated, List

import typer
from rich.markup import escape

from sleep_progress import config, console, interval, logging_utils, sleeper, utils
from sleep_progress.exception import InvalidTimeInterval

app = typer.Typer(
    add_completion=False,
    context_settings={'help_option_names': ['-h', '--help']},
)


def version_callback(value: bool) -> None:
    if value:
        version = utils.get_version()

        console.console.print(f'sleep-progress {version}')
        raise typer.Exit()


@app.command(
    help='Pause for NUMBER seconds, optionally displaying a progress bar with an ETA.',
)
def main(
    number: Annotated[
        List[str],
        typer.Argument(
            metavar='NUMBER...',
            show_default=False,
            help="Pause for NUMBER seconds. SUFFIX may be 's' for seconds (the default), "
            "'m' for minutes, 'h' for hours or 'd' for days. NUMBER need not be an integer. "
            'Given two or more arguments, pause for the amount of time specified by '
            'the sum of their values.',
        ),
    ],
    progress: bool = typer.Option(
        False,
        '--progress',
        '-p',
        help='Display the sleep indicator.',
    ),
    debug: bool = typer.Option(
        False,
        '--debug',
        hidden=True,
        help='Print debug logs to stderr.',
    ),
    version: Annotated[
        bool,
        typer.Option(
            '--version',
            '-V',
            callback=version_callback,
            is_eager=True,
            help='Print version information.',
        ),
    ] = False,
):
    logging_utils.setup_logging(debug)
    try:
        total_ms = interval.parse_interval(number)
    except InvalidTimeInterval as e:
        console.stderr_console.print(
            f'[error]{escape(str(e))}[/error]', soft_wrap=True
        )
        console.stderr_console.print(
            f'[hint]{escape(e.hint or "")}[/hint]', soft_wrap=True
        )
        raise typer.Exit(1) from None

    cfg = config.get_config()
    try:
        asyncio.run(
            sleeper.sleep_for(
                total_ms,
                progress=progress or cfg.progress,
                tick=cfg.tick,
            )
        )
    except KeyboardInterrupt:
        raise typer.Exit(130) from None
