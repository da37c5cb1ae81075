from tracklang.commands.cfg import cfg  # noqa: F401
from tracklang.commands.rank import rank  # noqa: F401
from tracklang.commands.score import score  # noqa: F401
