from __future__ import annotations

from pathlib import Path
from typing import Union

import pytomlpp


def load_toml(path: Union[Path, str]) -> dict:
    if not isinstance(path, Path):
        path = Path(path)
    if not path.is_file():
        return {}
    return pytomlpp.load(path)


def save_toml(data: dict, path: Union[Path, str]) -> None:
    if not isinstance(path, Path):
        path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pytomlpp.dump(data, path)
