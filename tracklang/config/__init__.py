from __future__ import annotations

from pathlib import Path
from typing import Any

import pytomlpp
from appdirs import AppDirs
from requests.structures import CaseInsensitiveDict

from tracklang.utils.language import parse_preferences


class Config:
    def __init__(self, **kwargs: Any):
        # e.g. {"audio": ["ja", "en"], "subtitle": "en-US, en"}, keys are case-insensitive
        self.preferences = CaseInsensitiveDict(kwargs.get("preferences") or {})
        self.directories: dict = kwargs.get("directories") or {}

    def get_preferences(self, axis: str) -> list[str]:
        """Get the preferred languages for an axis like `audio` or `subtitle`, best first."""
        return parse_preferences(self.preferences.get(axis))

    @classmethod
    def from_toml(cls, path: Path) -> Config:
        if not path.exists():
            raise FileNotFoundError(f"Config file path ({path}) was not found")
        if not path.is_file():
            raise FileNotFoundError(f"Config file path ({path}) is not to a file.")
        return cls(**pytomlpp.load(path))


class Directories:
    def __init__(self) -> None:
        self.app_dirs = AppDirs("tracklang", False)
        self.user_configs = Path(self.app_dirs.user_config_dir)
        self.logs = Path(self.app_dirs.user_log_dir)


class Filenames:
    def __init__(self) -> None:
        self.root_config: Path = directories.user_configs / "tracklang.toml"


directories = Directories()
filenames = Filenames()
# a missing root config just means nothing has been configured yet
config = Config.from_toml(filenames.root_config) if filenames.root_config.is_file() else Config()

if config.directories.get("logs"):
    directories.logs = Path(config.directories["logs"]).expanduser()
