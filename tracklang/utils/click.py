from __future__ import annotations

from typing import Optional, Union

import click

from tracklang.config import config
from tracklang.constants import MAX_PREFERENCES
from tracklang.objects import Track
from tracklang.utils.language import parse_preferences


class LanguageRange(click.ParamType):
    name = "lang_range"

    def convert(
        self, value: Union[str, list], param: Optional[click.Parameter] = None, ctx: Optional[click.Context] = None
    ) -> list[str]:
        languages = parse_preferences(value)
        if len(languages) > MAX_PREFERENCES:
            self.fail(f"At most {MAX_PREFERENCES} languages can be preferred, got {len(languages)}", param, ctx)
        return languages


class TrackKind(click.ParamType):
    name = "kind"

    def convert(
        self, value: Union[str, Track.Kind], param: Optional[click.Parameter] = None,
        ctx: Optional[click.Context] = None
    ) -> Track.Kind:
        if isinstance(value, Track.Kind):
            return value
        try:
            return Track.Kind[value.upper()]
        except KeyError:
            self.fail(
                f"{value!r} is not a valid track kind, expected one of: "
                f"{', '.join(x.name.lower() for x in Track.Kind)}",
                param,
                ctx
            )


def get_preferences(lang: Optional[list[str]], axis: Optional[str]) -> list[str]:
    """Get the preference list to match with, either given directly or from an axis of the config."""
    if lang:
        return lang
    if axis:
        value = config.preferences.get(axis)
        if value is not None and not isinstance(value, (str, list)):
            raise click.UsageError(
                f"Preferred languages for the '{axis}' axis must be a string or a list, not {type(value).__name__}."
            )
        preferences = config.get_preferences(axis)
        if not preferences:
            raise click.UsageError(f"No preferred languages are configured for the '{axis}' axis.")
        if len(preferences) > MAX_PREFERENCES:
            raise click.UsageError(f"At most {MAX_PREFERENCES} languages can be preferred for the '{axis}' axis.")
        return preferences
    raise click.UsageError("Preferred languages must be given with either --lang or --axis.")


LANGUAGE_RANGE = LanguageRange()
TRACK_KIND = TrackKind()
