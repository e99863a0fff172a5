from typing import List, Optional

from rich.console import Capture, Console

from sleep_progress import console

HELP_HINT = 'Try `sleep-progress --help` for more informations.'


class PossiblyCapture:
    def __init__(
        self, console: Console, msg: List[str], capture: Optional[Capture] = None
    ):
        self.console = console
        self.msg = msg
        self.capture = capture
        self.actual_capture = None

    def __enter__(self):
        if self.capture is not None:
            return
        self.actual_capture = self.console.capture()
        self.actual_capture.__enter__()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if self.actual_capture is not None:
            self.actual_capture.__exit__(exc_type, exc_value, traceback)
            self.msg.append(self.actual_capture.get())
            self.actual_capture = None


class SleepProgressException(RuntimeError):
    """Error whose message is built by printing to a captured rich console.

    Used as a context manager, everything printed inside the block becomes
    part of the message and the exception is raised on exit:

        with InvalidConfig() as err:
            err.print('[error]bad value[/error]')
    """

    hint: Optional[str] = HELP_HINT

    def __init__(self):
        super().__init__()
        self.msg = []
        self.capture = None
        self.console = console.new_console()

    def possibly_capture(self):
        return PossiblyCapture(self.console, self.msg, self.capture)

    def print(self, *args, **kwargs):
        kwargs.setdefault('soft_wrap', True)
        with self.possibly_capture():
            self.console.print(*args, **kwargs)

    def __enter__(self):
        capture = self.console.capture()
        capture.__enter__()
        self.capture = capture
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if self.capture is not None:
            self.capture.__exit__(exc_type, exc_value, traceback)
            self.msg.append(self.capture.get())
            self.capture = None
        if exc_type is not None:
            return
        raise self

    def __str__(self) -> str:
        if not self.msg:
            return ''
        return ''.join(self.msg).rstrip('\n')


class InvalidTimeInterval(SleepProgressException):
    def __init__(self, origin: str):
        super().__init__()
        self.origin = origin

    def __str__(self) -> str:
        return f"invalid time interval '{self.origin}'"


class InvalidConfig(SleepProgressException):
    hint = None
