import tomllib
from pathlib import Path

from dacite import from_dict

from utils.config import Config

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.toml"


def load_config(config_path: str | Path | None = None) -> Config:
    with open(config_path or DEFAULT_CONFIG_PATH, "rb") as f:
        config_dict = tomllib.load(f)
    return from_dict(Config, config_dict)
