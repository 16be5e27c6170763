"""
Result rows for the ranking endpoint.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Sequence

from pydantic import BaseModel

from acpl import ScoredGame, tag_value

NO_GAMES_MESSAGE = (
    "No games found. Make sure the username is correct and that games with "
    "computer analysis are available."
)

TIME_CONTROL_SYMBOLS: Dict[str, str] = {
    "bullet": "➤",
    "blitz": "🔥",
    "rapid": "🐇",
    "classical": "🐢",
}


class GameRow(BaseModel):
    game_id: str
    rank: int
    acpl: float
    formatted_date: str
    white: str
    white_elo: str
    black: str
    black_elo: str
    result_white: str
    result_black: str
    result: str
    opening: str
    moves: int
    url: str


def time_control_symbol(time_control: str) -> str:
    return TIME_CONTROL_SYMBOLS.get(time_control, "")


def format_pgn_date(value: str) -> str:
    """"2024.03.07" -> "Mar 7, 2024"; "" for unknown or partial dates."""
    try:
        d = datetime.strptime(value, "%Y.%m.%d")
    except ValueError:
        return ""
    return f"{d:%b} {d.day}, {d.year}"


def split_result(result: str) -> tuple:
    """"1-0" -> ("1", "0"), "1/2-1/2" -> ("1/2", "1/2")."""
    white, sep, black = result.partition("-")
    if not sep:
        return result, ""
    return white, black


def build_row(scored: ScoredGame, rank: int) -> GameRow:
    g = scored.game
    result = tag_value(g, "Result")
    result_white, result_black = split_result(result)
    return GameRow(
        game_id=tag_value(g, "GameId"),
        rank=rank,
        acpl=scored.acpl,
        formatted_date=format_pgn_date(tag_value(g, "Date")),
        white=tag_value(g, "White"),
        white_elo=tag_value(g, "WhiteElo"),
        black=tag_value(g, "Black"),
        black_elo=tag_value(g, "BlackElo"),
        result_white=result_white,
        result_black=result_black,
        result=result,
        opening=tag_value(g, "Opening").split(",", 1)[0],
        moves=g.ply_count // 2,
        url=tag_value(g, "Site"),
    )


def build_rows(results: Sequence[ScoredGame], limit: int) -> List[GameRow]:
    """Rows for the ``limit`` best games, ranked from 1."""
    return [build_row(scored, i + 1) for i, scored in enumerate(results[:max(limit, 0)])]
