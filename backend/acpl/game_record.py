"""
Game record model built on python-chess's PGN reader.

Only what ranking needs is kept: tag pairs in file order, the mainline moves,
and the comments attached to each mainline ply. Variations are skipped.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import chess
import chess.pgn


class UnparseableRecordError(ValueError):
    """The text is not a readable PGN game."""


@dataclass
class GameRecord:
    tags: List[Tuple[str, str]] = field(default_factory=list)
    moves: List[chess.Move] = field(default_factory=list)
    # comments[i] holds every comment written after ply i, in order
    comments: List[List[str]] = field(default_factory=list)
    result: str = "*"

    @property
    def ply_count(self) -> int:
        return len(self.moves)

    def tag(self, key: str) -> str:
        for k, v in self.tags:
            if k == key:
                return v
        return ""


class _RecordVisitor(chess.pgn.BaseVisitor[GameRecord]):
    def __init__(self) -> None:
        self.record = GameRecord()

    def visit_header(self, tagname: str, tagvalue: str) -> None:
        self.record.tags.append((tagname, tagvalue))

    def begin_variation(self) -> Optional[chess.pgn.SkipType]:
        return chess.pgn.SKIP

    def visit_move(self, board: chess.Board, move: chess.Move) -> None:
        self.record.moves.append(move)
        self.record.comments.append([])

    def visit_comment(self, comment: Union[str, List[str]]) -> None:
        # Comments before the first move belong to the game, not a ply.
        if not self.record.comments:
            return
        texts = [comment] if isinstance(comment, str) else list(comment)
        self.record.comments[-1].extend(texts)

    def visit_result(self, result: str) -> None:
        self.record.result = result

    def result(self) -> GameRecord:
        return self.record


def parse_record(text: str) -> GameRecord:
    """Parse one PGN game; raise UnparseableRecordError if it cannot be read."""
    try:
        record = chess.pgn.read_game(io.StringIO(text), Visitor=_RecordVisitor)
    except ValueError as e:
        raise UnparseableRecordError(str(e)) from e

    if record is None:
        raise UnparseableRecordError("no game found")
    return record


def tag_value(game: GameRecord, key: str) -> str:
    """Value of the first tag named ``key``, or "" if the game has none."""
    return game.tag(key)
