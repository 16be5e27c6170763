from .config import DEFAULT_CONFIG, RankConfig
from .evaluation import clamp_eval, parse_eval
from .game_record import GameRecord, UnparseableRecordError, parse_record, tag_value
from .ranker import ScoredGame, compute_acpl, player_color, rank_by_acpl
from .splitter import (
    RecordStreamError,
    RecordTooLargeError,
    join_records,
    split_records,
)

__all__ = [
    'DEFAULT_CONFIG',
    'RankConfig',
    'clamp_eval',
    'parse_eval',
    'GameRecord',
    'UnparseableRecordError',
    'parse_record',
    'tag_value',
    'ScoredGame',
    'compute_acpl',
    'player_color',
    'rank_by_acpl',
    'RecordStreamError',
    'RecordTooLargeError',
    'join_records',
    'split_records',
]
