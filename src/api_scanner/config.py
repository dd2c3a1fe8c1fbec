"""Project configuration (.api-scanner.json / .api-scanner.yaml)."""

import json
import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from api_scanner.parser.base import InfoAuthentication

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(".api-scanner.json")

OutputFormat = Literal["json", "json-folder", "markdown", "swagger", "react"]


class ScannerConfig(BaseModel):
    """Settings read from the config file; every field is optional."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    path: str | None = None
    output: str | None = None
    format: OutputFormat | None = None
    verbose: bool = False
    ignore: list[str] | None = None
    base_url: str | None = None
    title: str | None = None
    version: str | None = None
    description: str | None = None
    authentication: InfoAuthentication | None = None


def load_config(config_path: Path) -> ScannerConfig:
    """Load the config file, or return defaults if it is missing or invalid."""
    if not config_path.exists():
        return ScannerConfig()

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Could not read config file '%s': %s", config_path, e)
        return ScannerConfig()

    data = None
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning("Could not parse config file '%s': %s", config_path, e)
            return ScannerConfig()

    if data is None:
        return ScannerConfig()
    if not isinstance(data, dict):
        logger.warning("Config file '%s' must contain an object", config_path)
        return ScannerConfig()

    try:
        return ScannerConfig.model_validate(data)
    except ValidationError as e:
        logger.warning("Invalid config file '%s': %s", config_path, e)
        return ScannerConfig()


def save_config(config: ScannerConfig, config_path: Path) -> None:
    data = config.model_dump(by_alias=True, exclude_none=True)
    config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
