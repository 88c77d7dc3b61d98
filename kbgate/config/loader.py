"""Read and write the JSON configuration file."""

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from kbgate.config.schema import Config


def get_config_dir() -> Path:
    return Path.home() / ".kbgate"


def get_config_path() -> Path:
    """``~/.kbgate/config.json``."""
    return get_config_dir() / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """Build the process configuration.

    ``KBGATE_*`` environment variables fill in whatever the file leaves out;
    values present in the file take precedence. A missing file means
    defaults plus environment. An unreadable or invalid file is reported
    and ignored.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return Config()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Config(**data)
    except (json.JSONDecodeError, ValidationError, TypeError) as e:
        logger.warning("Ignoring config file {}: {}", path, e)
        return Config()


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Write ``config`` as indented JSON, creating the directory if needed."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(config.model_dump(), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


def read_config_file(config_path: Path) -> Config:
    """Validate the file on its own, without ``KBGATE_*`` environment values.

    Raises ``json.JSONDecodeError`` or ``pydantic.ValidationError`` for a bad file.
    """
    data = json.loads(config_path.read_text(encoding="utf-8"))
    return Config.model_validate(data)
