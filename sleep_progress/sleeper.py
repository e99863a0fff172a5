import asyncio
import logging
import math
import time
from typing import Optional

import rich.console
import rich.progress
import rich.text

from sleep_progress import console as app_console

logger = logging.getLogger(__name__)

# asyncio.sleep() is not happy with arbitrarily large delays.
MAX_SLEEP_CHUNK_SECONDS = 24 * 60 * 60


def format_eta(seconds: Optional[float]) -> str:
    if seconds is None or math.isnan(seconds):
        return '--:--:--'
    total = max(0, math.ceil(seconds))
    days, rest = divmod(total, 24 * 60 * 60)
    hours, rest = divmod(rest, 60 * 60)
    minutes, secs = divmod(rest, 60)
    eta = f'{hours:02d}:{minutes:02d}:{secs:02d}'
    if days:
        return f'{days}d {eta}'
    return eta


class EtaColumn(rich.progress.ProgressColumn):
    """Remaining time of the task, assuming it advances one unit per second."""

    def render(self, task: rich.progress.Task) -> rich.text.Text:
        return rich.text.Text(
            f'[{format_eta(task.remaining)}]', style='progress.remaining'
        )


class ProgressSleep:
    def __init__(
        self, total: float, console: Optional[rich.console.Console] = None
    ):
        self.total = total
        self.completed = 0.0
        self.progress = rich.progress.Progress(
            rich.progress.BarColumn(bar_width=None),
            EtaColumn(),
            console=console or app_console.console,
            transient=True,
            auto_refresh=False,
            expand=True,
        )
        self.task_id = self.progress.add_task('sleep', total=total)

    def start(self):
        self.progress.start()
        self.progress.refresh()

    def advance_to(self, completed: float):
        completed = min(completed, self.total)
        if completed <= self.completed:
            return
        self.completed = completed
        self.progress.update(self.task_id, completed=completed, refresh=True)

    def finish_and_clear(self):
        self.progress.stop()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *args, **kwargs):
        self.finish_and_clear()


async def wait(seconds: float):
    remaining = seconds
    while remaining > 0:
        chunk = min(remaining, MAX_SLEEP_CHUNK_SECONDS)
        await asyncio.sleep(chunk)
        remaining -= chunk


async def _repaint(bar: ProgressSleep, started: float, tick: float):
    while True:
        await asyncio.sleep(tick)
        bar.advance_to(time.monotonic() - started)


async def sleep_for(
    interval_ms: int,
    *,
    progress: bool = False,
    tick: float = 1.0,
    console: Optional[rich.console.Console] = None,
):
    """Wait for `interval_ms` milliseconds, optionally drawing a progress bar.

    The bar is repainted every `tick` seconds by a separate task that only
    reads the clock, so it never delays the end of the wait. It is cleared
    from the terminal once the wait is over.
    """
    seconds = interval_ms / 1000
    logger.debug('Sleeping for %s s (progress=%s)', seconds, progress)
    sleep_task = asyncio.create_task(wait(seconds))
    if not progress:
        await sleep_task
        logger.debug('Done sleeping')
        return

    with ProgressSleep(seconds, console=console) as bar:
        started = time.monotonic()
        repaint_task = asyncio.create_task(_repaint(bar, started, tick))
        try:
            await sleep_task
        finally:
            repaint_task.cancel()
            # Does not propagate our own cancellation into the repaint task.
            await asyncio.wait([repaint_task])
    logger.debug('Done sleeping, progress bar cleared')
