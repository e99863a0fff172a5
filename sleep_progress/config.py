import functools
import logging
import pathlib

import typer
import yaml
from pydantic import BaseModel, Field, ValidationError
from rich.markup import escape

from sleep_progress import utils
from sleep_progress.exception import InvalidConfig

logger = logging.getLogger(__name__)

APP_NAME = utils.APP_NAME
_CONFIG_FILE_NAME = 'config.yml'


class SleepConfig(BaseModel):
    progress: bool = Field(
        default=False,
        description='Whether to display the progress bar even without --progress.',
    )

    tick: float = Field(
        default=1.0,
        gt=0,
        allow_inf_nan=False,
        description='Seconds between two repaints of the progress bar.',
    )


def get_app_path() -> pathlib.Path:
    return pathlib.Path(typer.get_app_dir(APP_NAME))


def get_config_path() -> pathlib.Path:
    return get_app_path() / _CONFIG_FILE_NAME


def load_config(path: pathlib.Path) -> SleepConfig:
    shown_path = escape(str(path))
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        with InvalidConfig() as err:
            err.print(
                f'[error]Config file [item]{shown_path}[/item] is not valid YAML.[/error]'
            )
            err.print(str(e), markup=False)
    if data is None:
        return SleepConfig()
    if not isinstance(data, dict):
        with InvalidConfig() as err:
            err.print(
                f'[error]Config file [item]{shown_path}[/item] must contain a mapping.[/error]'
            )
    try:
        return SleepConfig.model_validate(data)
    except ValidationError as e:
        with InvalidConfig() as err:
            err.print(f'[error]Config file [item]{shown_path}[/item] is invalid.[/error]')
            err.print(str(e), markup=False)


@functools.cache
def get_config() -> SleepConfig:
    config_path = get_config_path()
    if not config_path.is_file():
        logger.debug('No config file at %s, using defaults', config_path)
        return SleepConfig()
    logger.debug('Loading config from %s', config_path)
    return load_config(config_path)
