"""
ACPL Ranker

Ranks a player's games by Average Centipawn Loss, computed from the
``[%eval ...]`` annotations Lichess embeds in analysed PGN exports.
Lower ACPL means a more accurate game, so the best games come first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import chess

from .config import DEFAULT_CONFIG, RankConfig
from .evaluation import clamp_eval, parse_eval
from .game_record import GameRecord, UnparseableRecordError, parse_record
from .splitter import ByteSource, split_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredGame:
    game: GameRecord
    acpl: float


def player_color(game: GameRecord, username: str) -> Optional[chess.Color]:
    """Side ``username`` played in ``game`` (case-insensitive), White first."""
    name = username.casefold()
    if game.tag("White").casefold() == name:
        return chess.WHITE
    if game.tag("Black").casefold() == name:
        return chess.BLACK
    return None


def compute_acpl(game: GameRecord, username: str) -> Optional[float]:
    """
    Average centipawn loss of ``username`` in ``game``.

    Every ply with a readable evaluation moves the baseline, whoever played it.
    Only the player's own plies are scored, each as the drop from the
    previous baseline seen from their side, never below zero.

    Returns None when the player is not in the game or none of their moves
    could be scored.
    """
    color = player_color(game, username)
    if color is None:
        return None

    total_loss = 0.0
    count = 0
    baseline: Optional[float] = None

    for ply in range(min(len(game.moves), len(game.comments))):
        comments = game.comments[ply]
        if not comments:
            continue

        # later comments on the same ply win
        cp = parse_eval(comments[-1])
        if cp is None:
            continue
        cp = clamp_eval(cp)

        mover = chess.WHITE if ply % 2 == 0 else chess.BLACK
        if mover == color and baseline is not None:
            loss = baseline - cp
            if color == chess.BLACK:
                loss = -loss
            total_loss += max(loss, 0.0)
            count += 1

        baseline = cp

    if count == 0:
        return None

    return total_loss / count


def rank_by_acpl(
    source: ByteSource,
    username: str,
    min_plies: int = 0,
    config: Optional[RankConfig] = None,
) -> List[ScoredGame]:
    """
    Score every game in a PGN stream for ``username`` and sort by ACPL.

    Blank and unparseable records, games shorter than ``min_plies``, games the
    player is not in, and games without scoreable moves are left out. Ties
    keep stream order.

    Raises:
        RecordStreamError: if the stream cannot be read. Records before the
            failure are consumed but no partial result is returned.
    """
    config = config or DEFAULT_CONFIG

    results: List[ScoredGame] = []
    seen = 0
    malformed = 0

    records = split_records(
        source,
        chunk_size=config.read_chunk_size,
        max_record_bytes=config.max_record_bytes,
    )
    for text in records:
        if not text.strip():
            continue
        seen += 1

        try:
            game = parse_record(text)
        except UnparseableRecordError as e:
            malformed += 1
            logger.debug(f"Skipping malformed PGN record: {e}")
            continue

        if game.ply_count < min_plies:
            continue

        acpl = compute_acpl(game, username)
        if acpl is None:
            continue

        results.append(ScoredGame(game=game, acpl=acpl))

    results.sort(key=lambda scored: scored.acpl)

    logger.info(
        f"Ranked {len(results)} of {seen} games for {username} "
        f"({malformed} malformed, min plies {min_plies})"
    )
    return results
