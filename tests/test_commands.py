import os

import pytest
from click.testing import CliRunner

from tracklang.config import Config
from tracklang.constants import FULL_BASE, MAX_PREFERENCES, PARTIAL_PENALTY
from tracklang.tracklang import main, rotate_logs
from tracklang.utils import Logger


@pytest.fixture
def runner():
    return CliRunner()


def test_score(runner):
    result = runner.invoke(main, ["score", "-l", "fr-CA,fr-FR", "fr-FR"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == str(FULL_BASE - 1)


def test_score_partial(runner):
    result = runner.invoke(main, ["score", "--lang", "en; fr-FR", "fr-CA"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == str(FULL_BASE - PARTIAL_PENALTY - 1)


def test_score_no_candidate(runner):
    result = runner.invoke(main, ["score", "-l", "en"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "0"


def test_score_axis(runner, configured):
    result = runner.invoke(main, ["score", "-a", "audio", "eng"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == str(FULL_BASE - 1)


def test_score_lang_overrides_axis(runner, configured):
    result = runner.invoke(main, ["score", "-l", "en", "-a", "audio", "eng"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == str(FULL_BASE)


def test_score_unconfigured_axis(runner, configured):
    result = runner.invoke(main, ["score", "-a", "video", "en"])
    assert result.exit_code == 2
    assert "video" in result.output


def test_score_without_preferences(runner):
    result = runner.invoke(main, ["score", "en"])
    assert result.exit_code == 2


def test_too_many_preferences(runner):
    langs = ",".join(["en"] * (MAX_PREFERENCES + 1))
    result = runner.invoke(main, ["score", "-l", langs, "en"])
    assert result.exit_code == 2


def test_rank(runner):
    result = runner.invoke(main, ["rank", "-l", "jpn,en", "en-US", "ja", "de"])
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert len(lines) == 3
    assert lines[0].startswith(f"{FULL_BASE} | Audio | [2] | ja")
    assert lines[1].startswith(f"{FULL_BASE - PARTIAL_PENALTY - 1} | Audio | [1] | en-US")
    assert lines[2].startswith("         0 | Audio | [3] | de")


def test_rank_best(runner, configured):
    result = runner.invoke(main, ["rank", "--best", "-k", "subtitle", "-a", "subtitle", "en-GB", "en", "pt-BR"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "en"


def test_rank_best_no_match(runner):
    result = runner.invoke(main, ["rank", "--best", "-l", "ja", "en", "de"])
    assert result.exit_code == 1
    assert result.stdout == ""


def test_rank_no_candidates(runner):
    result = runner.invoke(main, ["rank", "-l", "ja"])
    assert result.exit_code == 2


def test_rank_invalid_kind(runner):
    result = runner.invoke(main, ["rank", "-k", "chapters", "-l", "ja", "ja"])
    assert result.exit_code == 2
    assert "chapters" in result.output


def test_cfg(runner, root_config):
    result = runner.invoke(main, ["cfg", "preferences.audio", "['ja', 'en']"])
    assert result.exit_code == 0, result.output
    assert root_config.is_file()

    result = runner.invoke(main, ["cfg", "preferences.subtitle", "en-US, en"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(main, ["cfg", "preferences.audio"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "preferences.audio: ['ja', 'en']"

    result = runner.invoke(main, ["cfg", "preferences.subtitle"])
    assert result.stdout.strip() == "preferences.subtitle: en-US, en"

    result = runner.invoke(main, ["cfg", "--list"])
    assert result.exit_code == 0, result.output
    assert "preferences" in result.output

    result = runner.invoke(main, ["cfg", "--unset", "preferences.audio"])
    assert result.exit_code == 0, result.output
    result = runner.invoke(main, ["cfg", "preferences.audio"])
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_cfg_nothing_to_do(runner, root_config):
    result = runner.invoke(main, ["cfg"])
    assert result.exit_code == 2


def test_log_file(runner, tmp_path):
    log_path = tmp_path / "logs" / "tracklang_{name}.log"
    log = Logger.getLogger()
    handlers = list(log.handlers)
    try:
        result = runner.invoke(main, ["--debug", "--log", str(log_path), "score", "-l", "en", "eng"])
    finally:
        for handler in log.handlers[len(handlers):]:
            log.removeHandler(handler)
            handler.close()
    assert result.exit_code == 0, result.output
    content = (tmp_path / "logs" / "tracklang_root.log").read_text("utf8")
    assert "FULL" in content


def test_cfg_rejects_number_for_preferences(runner, root_config):
    result = runner.invoke(main, ["cfg", "preferences.audio", "5"])
    assert result.exit_code == 2
    assert "int" in result.output
    assert not root_config.exists()


@pytest.mark.parametrize("value", ["[]", "['ja', 5]", "{'ja': 1}", "''"])
def test_cfg_rejects_invalid_preferences(runner, root_config, value):
    result = runner.invoke(main, ["cfg", "preferences.audio", value])
    assert result.exit_code == 2
    assert not root_config.exists()


def test_cfg_rejects_too_many_preferences(runner, root_config):
    value = ",".join(["en"] * (MAX_PREFERENCES + 1))
    result = runner.invoke(main, ["cfg", "preferences.audio", value])
    assert result.exit_code == 2
    assert not root_config.exists()


def test_cfg_rejects_nested_preferences(runner, root_config):
    result = runner.invoke(main, ["cfg", "preferences.audio.main", "en"])
    assert result.exit_code == 2


def test_cfg_accepts_preferences(runner, root_config):
    result = runner.invoke(main, ["cfg", "preferences.audio", "ja"])
    assert result.exit_code == 0, result.output
    result = runner.invoke(main, ["cfg", "preferences.audio"])
    assert result.stdout.strip() == "preferences.audio: ja"


def test_cfg_other_keys_are_not_checked(runner, root_config):
    result = runner.invoke(main, ["cfg", "directories.logs", "5"])
    assert result.exit_code == 0, result.output
    result = runner.invoke(main, ["cfg", "directories.logs"])
    assert result.stdout.strip() == "directories.logs: 5"


def test_cfg_unset_missing_key(runner, root_config):
    result = runner.invoke(main, ["cfg", "--unset", "preferences.audio"])
    assert result.exit_code == 0, result.output
    assert not root_config.exists()


def test_axis_with_invalid_configured_value(runner, monkeypatch):
    monkeypatch.setattr("tracklang.utils.click.config", Config(preferences={"audio": 5}))
    for args in (["score", "-a", "audio", "en"], ["rank", "-a", "audio", "en"]):
        result = runner.invoke(main, args)
        assert result.exit_code == 2
        assert "must be a string or a list" in result.output
        assert not isinstance(result.exception, TypeError)


def test_log_rotation_keeps_unrelated_files(tmp_path):
    logs = tmp_path / "logs"
    logs.mkdir()
    for i in range(25):
        (logs / f"other_app_{i:02}.log").write_text("", "utf8")
    rotate_logs(logs, "tracklang_{name}_{time}.log")
    rotate_logs(logs, "tracklang.log")
    assert len(list(logs.glob("other_app_*.log"))) == 25


def test_log_rotation_keeps_newest(tmp_path):
    for i in range(25):
        path = tmp_path / f"tracklang_root_{i:02}.log"
        path.write_text("", "utf8")
        # names sort the opposite way to age
        os.utime(path, (1_000_000 - i * 100, 1_000_000 - i * 100))
    (tmp_path / "notes.log").write_text("", "utf8")
    rotate_logs(tmp_path, "tracklang_{name}_{time}.log")
    kept = sorted(x.name for x in tmp_path.glob("tracklang_root_*.log"))
    assert kept == [f"tracklang_root_{i:02}.log" for i in range(19)]
    assert (tmp_path / "notes.log").exists()


def test_log_rotation_without_fixed_prefix(tmp_path):
    for i in range(25):
        (tmp_path / f"{i:02}.log").write_text("", "utf8")
    rotate_logs(tmp_path, "{time}.log")
    assert len(list(tmp_path.glob("*.log"))) == 25
