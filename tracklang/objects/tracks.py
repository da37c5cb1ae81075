from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator, Optional, Sequence, Union

from langcodes import Language
from langcodes.tag_parser import LanguageTagError

from tracklang.utils import Logger, match_language
from tracklang.utils.collections import as_list


class Track:
    class Kind(Enum):
        VIDEO = 1
        AUDIO = 2
        SUBTITLE = 3

    def __init__(
        self, id_: str, language: Optional[str], kind: Kind, name: Optional[str] = None,
        default: bool = False, forced: bool = False
    ) -> None:
        self.id = id_
        # the tag as the container stores it, it's never normalized so it can be matched as-is
        self.language = language or None
        self.kind = kind
        self.name = name
        # metadata only, deciding what to do with default or forced tracks is up to the caller
        self.default = bool(default)
        self.forced = bool(forced)

    def __repr__(self) -> str:
        return "{name}({items})".format(
            name=self.__class__.__name__,
            items=", ".join([f"{k}={repr(v)}" for k, v in self.__dict__.items()])
        )

    def __str__(self) -> str:
        return " | ".join(filter(bool, [
            self.kind.name.title(),
            f"[{self.id}]",
            self.language or "und",
            self.get_track_name(),
            self.name,
            "Default" if self.default else "",
            "Forced" if self.forced else ""
        ]))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Track) and self.id == other.id

    def get_track_name(self) -> Optional[str]:
        """Get the display name of the Track's language, if it can be understood."""
        if not self.language:
            return None
        try:
            language = Language.get(self.language)
        except (LanguageTagError, ValueError):
            return None
        if not language.language or language.language == "und":
            return None
        return language.display_name()

    def score(self, by_language: Optional[Sequence[Optional[str]]]) -> int:
        return match_language(by_language, self.language)


class Tracks:
    """
    Tracks.
    Stores video, audio, and subtitle tracks.
    It provides convenience functions for listing, sorting, and selecting tracks by language.
    """

    def __init__(self, *args: Union[Tracks, list[Track], Track]):
        self.videos: list[Track] = []
        self.audio: list[Track] = []
        self.subtitles: list[Track] = []

        for tracks in args:
            self.add(tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(as_list(self.videos, self.audio, self.subtitles))

    def __repr__(self) -> str:
        return "{name}({items})".format(
            name=self.__class__.__name__,
            items=", ".join([f"{k}={repr(v)}" for k, v in self.__dict__.items()])
        )

    def __str__(self) -> str:
        rep = ""
        for kind in Track.Kind:
            tracks = self.of_kind(kind)
            if not tracks:
                continue
            rep += "{count} {type} Track{plural}:\n".format(
                count=len(tracks),
                type=kind.name.title(),
                plural="s" if len(tracks) != 1 else ""
            )
            for track in tracks:
                rep += f"{track}\n"
        return rep.rstrip()

    def of_kind(self, kind: Track.Kind) -> list[Track]:
        return {
            Track.Kind.VIDEO: self.videos,
            Track.Kind.AUDIO: self.audio,
            Track.Kind.SUBTITLE: self.subtitles
        }[kind]

    def exists(self, by_id: str) -> bool:
        return any(x.id == by_id for x in self)

    def add(self, tracks: Union[Tracks, Sequence[Track], Track], warn_only: bool = False) -> None:
        """Add a provided track to its appropriate array and ensuring it's not a duplicate."""
        duplicates = 0
        for track in [tracks] if isinstance(tracks, Track) else list(tracks):
            if not isinstance(track, Track):
                raise ValueError("Track type was not set or is invalid.")
            if self.exists(by_id=track.id):
                if not warn_only:
                    raise ValueError(f"Track ID {track.id!r} is a duplicate, Track IDs must be unique.")
                duplicates += 1
                continue
            self.of_kind(track.kind).append(track)

        if duplicates:
            log = Logger.getLogger("Tracks")
            log.warning(f" - Found and skipped {duplicates} duplicate tracks...")

    def print(self, level: int = logging.INFO) -> None:
        """Print the __str__ to log at a specified level."""
        log = Logger.getLogger("Tracks")
        for line in str(self).splitlines(keepends=False):
            log.log(level, line)

    def sort_by_language(self, kind: Track.Kind, by_language: Optional[Sequence[Optional[str]]]) -> None:
        """Sort tracks of a kind by how well they match the preferred languages, best first."""
        tracks = self.of_kind(kind)
        tracks.sort(key=lambda x: x.score(by_language), reverse=True)

    def sort_audio(self, by_language: Optional[Sequence[Optional[str]]] = None) -> None:
        self.sort_by_language(Track.Kind.AUDIO, by_language)

    def sort_subtitles(self, by_language: Optional[Sequence[Optional[str]]] = None) -> None:
        self.sort_by_language(Track.Kind.SUBTITLE, by_language)

    def select_best(self, kind: Track.Kind, by_language: Optional[Sequence[Optional[str]]]) -> Optional[Track]:
        """
        Get the track of a kind that best matches the preferred languages.
        Returns None if no track matches any of them. On equal scores the earlier track wins.
        """
        best = max(self.of_kind(kind), key=lambda x: x.score(by_language), default=None)
        if best is None or best.score(by_language) == 0:
            return None
        return best

    @classmethod
    def from_strings(cls, kind: Track.Kind, languages: Sequence[Optional[str]]) -> Tracks:
        """
        Create Tracks from bare language tags, one track per tag.
        Track IDs are the tag's position, starting at 1.

        Example:
            >>> print(Tracks.from_strings(Track.Kind.AUDIO, ["jpn", "en-US"]))
            2 Audio Tracks:
            Audio | [1] | jpn | Japanese
            Audio | [2] | en-US | English (United States)
        """
        return cls([
            Track(id_=str(i), language=language, kind=kind)
            for i, language in enumerate(languages, start=1)
        ])
