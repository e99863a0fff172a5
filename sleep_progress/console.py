from rich.console import Console
from rich.theme import Theme

theme = Theme(
    {
        'default': 'bright_white',
        'info': 'bright_black',
        'item': 'bold blue',
        'error': 'bold red',
        'hint': 'cyan',
        'warning': 'bold yellow',
    }
)
console = Console(theme=theme, style='info', highlight=False)
stderr_console = Console(theme=theme, style='info', highlight=False, stderr=True)


def new_console() -> Console:
    return Console(theme=theme, style='info', highlight=False)
