from typing import Optional

import click

from tracklang.objects import Track, Tracks
from tracklang.utils import Logger
from tracklang.utils.click import LANGUAGE_RANGE, TRACK_KIND, get_preferences


@click.command(name="rank", short_help="Rank track languages by the preferred languages.")
@click.argument("candidates", type=str, nargs=-1)
@click.option("-l", "--lang", type=LANGUAGE_RANGE, default=None,
              help="Preferred languages, best first, e.g. `jpn,en`.")
@click.option("-a", "--axis", type=str, default=None,
              help="Use the preferred languages configured for this axis, e.g. `audio` or `subtitle`.")
@click.option("-k", "--kind", type=TRACK_KIND, default="audio",
              help="Kind of track the candidates are, defaults to audio.")
@click.option("--best", is_flag=True, default=False,
              help="Only print the best matching candidate. Exits with 1 if none match.")
def rank(candidates: tuple[str, ...], lang: Optional[list[str]], axis: Optional[str], kind: Track.Kind,
         best: bool) -> None:
    """
    Rank CANDIDATES, the language tags of each track, best first.
    Candidates that score equally keep the order they were given in.
    """
    if not candidates:
        raise click.UsageError("No candidate languages were given to rank.")
    preferences = get_preferences(lang, axis)

    log = Logger.getLogger("rank")
    log.debug(f"Preferred languages: {', '.join(preferences)}")

    tracks = Tracks.from_strings(kind, candidates)

    if best:
        track = tracks.select_best(kind, preferences)
        if not track:
            log.exit(f" - No {kind.name.lower()} track matches the preferred languages: {', '.join(preferences)}")
        print(track.language)
        return

    tracks.sort_by_language(kind, preferences)
    for track in tracks.of_kind(kind):
        print(f"{track.score(preferences):>10} | {track}")
