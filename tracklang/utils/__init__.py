from tracklang.utils import Logger  # noqa: F401
from tracklang.utils.language import (  # noqa: F401
    Match, best_language, classify, is_language_match, match_language, normalize_primary, parse_preferences,
    rank_languages, score_language_match
)
