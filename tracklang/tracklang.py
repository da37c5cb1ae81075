import logging
import re
from collections import defaultdict
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import click

from tracklang.commands import cfg, rank, score
from tracklang.config import directories, filenames
from tracklang.utils import Logger


def get_logger(level: int = logging.INFO, log_path: Optional[Path] = None) -> Logger.Logger:
    """
    Setup logging for tracklang.
    If log_path is not set or false-y, logs won't be stored.
    """
    log = Logger.getLogger("tracklang", level=level)
    if log_path:
        if log_path.parent == Path("."):  # file name only
            log_path = directories.logs / log_path
        template = log_path.name
        log_path = log_path.parent / template.format_map(defaultdict(
            str,
            name="root",
            time=datetime.now().strftime("%Y%m%d-%H%M%S")
        ))
        if log_path.parent.exists():
            rotate_logs(log_path.parent, template)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        log.add_file_handler(log_path)
    return log


def rotate_logs(directory: Path, template: str, keep: int = 19) -> None:
    """
    Delete all but the `keep` newest log files made from a log name template.

    Only names matching the template, with every {field} as a wildcard, are
    considered. A template without fields, or without any fixed text before its
    first field, names a single file or too broad a set, and nothing is deleted.
    """
    prefix = template.split("{", 1)[0]
    if prefix == template or not prefix:
        return
    pattern = re.sub(r"\{[^{}]*\}", "*", template)
    log_files = sorted(
        (x for x in directory.glob(pattern) if x.is_file()),
        key=lambda x: x.stat().st_mtime,
        reverse=True
    )
    for log_file in log_files[keep:]:
        log_file.unlink()


@click.group(context_settings=dict(
    help_option_names=["-?", "-h", "--help"],
    max_content_width=116,  # max PEP8 line-width, -4 to adjust for initial indent
))
@click.option("--debug", is_flag=True, default=False, help="Enable DEBUG level logs.")
@click.option("--log", "log_path", type=Path, default=None,
              help="Also store logs to this path (or filename). Path can contain the f-string args: {name} {time}.")
def main(debug: bool, log_path: Optional[Path]) -> None:
    """
    Tracklang scores and ranks the language tags of audio and subtitle
    tracks by an ordered list of preferred languages.
    """
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)
    log = get_logger(level=logging.DEBUG if debug else logging.INFO, log_path=log_path)

    try:
        log.debug(f"Tracklang version {version('tracklang')}")
    except PackageNotFoundError:
        log.debug("Tracklang version unknown, it is not installed")
    log.debug(f"[Root Config] : {filenames.root_config}")
    log.debug(f"[Logs]        : {directories.logs}")


main.add_command(cfg)
main.add_command(rank)
main.add_command(score)


if __name__ == "__main__":
    main()
