import io
import pathlib
from collections.abc import Iterator

import pytest
from rich.console import Console

from sleep_progress import config, console


@pytest.fixture(autouse=True)
def config_path(tmp_path, monkeypatch) -> Iterator[pathlib.Path]:
    path = tmp_path / 'app' / 'config.yml'
    monkeypatch.setattr(config, 'get_config_path', lambda: path)
    config.get_config.cache_clear()
    yield path
    config.get_config.cache_clear()


@pytest.fixture
def write_config(config_path: pathlib.Path):
    def _write(text: str) -> pathlib.Path:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(text)
        config.get_config.cache_clear()
        return config_path

    return _write


@pytest.fixture
def terminal() -> Console:
    return Console(
        file=io.StringIO(),
        theme=console.theme,
        force_terminal=True,
        width=60,
        color_system=None,
    )
