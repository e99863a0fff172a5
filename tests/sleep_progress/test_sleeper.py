import asyncio
import time
from unittest import mock

import pytest
from rich.console import Console

from sleep_progress import sleeper


class TestFormatEta:
    @pytest.mark.parametrize(
        'seconds, expected',
        [
            (0, '00:00:00'),
            (-3, '00:00:00'),
            (1, '00:00:01'),
            (0.2, '00:00:01'),
            (59.5, '00:01:00'),
            (3661, '01:01:01'),
            (86399, '23:59:59'),
            (86400, '1d 00:00:00'),
            (2 * 86400 + 3661, '2d 01:01:01'),
        ],
    )
    def test_formats_remaining_time(self, seconds, expected):
        assert sleeper.format_eta(seconds) == expected

    def test_unknown_remaining_time(self):
        assert sleeper.format_eta(None) == '--:--:--'
        assert sleeper.format_eta(float('nan')) == '--:--:--'


class TestProgressSleep:
    def test_advance_is_monotonic_and_capped(self, terminal: Console):
        with sleeper.ProgressSleep(10, console=terminal) as bar:
            bar.advance_to(3)
            bar.advance_to(2)
            assert bar.completed == 3
            assert bar.progress.tasks[0].completed == 3

            bar.advance_to(20)
            assert bar.completed == 10
            assert bar.progress.tasks[0].completed == 10

    def test_renders_bar_with_eta(self, terminal: Console):
        with sleeper.ProgressSleep(3725, console=terminal) as bar:
            bar.advance_to(5)

        output = terminal.file.getvalue()
        assert '[01:02:05]' in output
        assert '[01:02:00]' in output

    def test_finish_stops_the_display(self, terminal: Console):
        bar = sleeper.ProgressSleep(1, console=terminal)
        bar.start()
        assert bar.progress.live.is_started
        bar.finish_and_clear()
        assert not bar.progress.live.is_started


@pytest.mark.asyncio
async def test_wait_splits_long_intervals():
    with mock.patch.object(sleeper.asyncio, 'sleep', new=mock.AsyncMock()) as sleep:
        await sleeper.wait(2.5 * 86400)

    assert sleep.await_args_list == [
        mock.call(86400),
        mock.call(86400),
        mock.call(43200.0),
    ]


@pytest.mark.asyncio
async def test_wait_zero_does_not_sleep():
    with mock.patch.object(sleeper.asyncio, 'sleep', new=mock.AsyncMock()) as sleep:
        await sleeper.wait(0)

    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_sleep_for_waits_the_whole_interval():
    started = time.monotonic()
    await sleeper.sleep_for(50)
    assert time.monotonic() - started >= 0.045


@pytest.mark.asyncio
async def test_sleep_for_with_progress_draws_and_clears(terminal: Console):
    started = time.monotonic()
    await sleeper.sleep_for(200, progress=True, tick=0.05, console=terminal)
    assert time.monotonic() - started >= 0.195

    output = terminal.file.getvalue()
    assert '[00:00:01]' in output

    pending = [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]
    assert pending == []


@pytest.mark.asyncio
@pytest.mark.parametrize('progress', [False, True])
async def test_progress_does_not_change_the_wait(progress: bool, terminal: Console):
    with mock.patch.object(sleeper, 'wait', new=mock.AsyncMock()) as wait:
        await sleeper.sleep_for(1500, progress=progress, console=terminal)

    wait.assert_awaited_once_with(1.5)


@pytest.mark.asyncio
async def test_repaint_never_delays_the_wait(terminal: Console):
    started = time.monotonic()
    await sleeper.sleep_for(50, progress=True, tick=10, console=terminal)
    assert time.monotonic() - started < 5


@pytest.mark.asyncio
async def test_cancel_while_repaint_is_stopping_propagates(terminal: Console):
    stopping = asyncio.Event()

    async def slow_to_stop(bar, started, tick):
        try:
            await asyncio.Event().wait()
        finally:
            stopping.set()
            await asyncio.sleep(0.2)

    with mock.patch.object(sleeper, '_repaint', new=slow_to_stop):
        outer = asyncio.create_task(
            sleeper.sleep_for(10, progress=True, console=terminal)
        )
        await stopping.wait()
        outer.cancel()

        with pytest.raises(asyncio.CancelledError):
            await outer

        await asyncio.sleep(0.3)
