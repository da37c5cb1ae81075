from typing import Optional

import click

from tracklang.utils import Logger, classify, match_language
from tracklang.utils.click import LANGUAGE_RANGE, get_preferences


@click.command(name="score", short_help="Score how well a language tag matches the preferred languages.")
@click.argument("candidate", type=str, required=False, default="")
@click.option("-l", "--lang", type=LANGUAGE_RANGE, default=None,
              help="Preferred languages, best first, e.g. `fr-CA,fr-FR,en`.")
@click.option("-a", "--axis", type=str, default=None,
              help="Use the preferred languages configured for this axis, e.g. `audio` or `subtitle`.")
def score(candidate: str, lang: Optional[list[str]], axis: Optional[str]) -> None:
    """
    Print the score of CANDIDATE against the preferred languages.

    \b
    The first preference matching fully scores 2147483647, every later
    preference one less. A partial match (e.g. fr-CA against fr-FR) scores
    1000 less than a full one. 0 means no match.
    """
    preferences = get_preferences(lang, axis)

    log = Logger.getLogger("score")
    for preference in preferences:
        log.debug(f"{preference}: {classify(preference, candidate).name}")

    print(match_language(preferences, candidate))
