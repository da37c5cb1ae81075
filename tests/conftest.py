import pytest

from tracklang.config import Config, filenames


@pytest.fixture
def root_config(tmp_path, monkeypatch):
    """Point the root config at a temporary file, which doesn't exist yet."""
    path = tmp_path / "tracklang.toml"
    monkeypatch.setattr(filenames, "root_config", path)
    return path


@pytest.fixture
def configured(monkeypatch):
    config = Config(preferences={
        "Audio": ["ja", "en"],
        "subtitle": "en-US, en"
    })
    monkeypatch.setattr("tracklang.utils.click.config", config)
    return config
