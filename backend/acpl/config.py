import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

load_dotenv()

# Limits
MAX_GAMES = int(os.getenv("ACPL_MAX_GAMES", "1000"))
MAX_RESULTS = int(os.getenv("ACPL_MAX_RESULTS", "50"))
MINIATURE_PLIES = int(os.getenv("ACPL_MINIATURE_PLIES", "40"))

# Stream splitting
READ_CHUNK_SIZE = int(os.getenv("ACPL_READ_CHUNK_SIZE", str(64 * 1024)))
MAX_RECORD_BYTES = int(os.getenv("ACPL_MAX_RECORD_BYTES", str(1024 * 1024)))

# Scoring
EVAL_CLAMP_CP = 1000.0

# Lichess
LICHESS_API_URL = os.getenv("LICHESS_API_URL", "https://lichess.org")
LICHESS_TIMEOUT_SECONDS = float(os.getenv("LICHESS_TIMEOUT_SECONDS", "120"))

# Rate limiting
RATE_LIMIT_PER_SECOND = float(os.getenv("RATE_LIMIT_PER_SECOND", "5"))
RATE_LIMIT_BURST = int(os.getenv("RATE_LIMIT_BURST", "10"))


@dataclass(frozen=True)
class RankConfig:
    """Settings for one ranking run, passed explicitly instead of read from globals."""

    max_games: int = MAX_GAMES
    max_results: int = MAX_RESULTS
    miniature_plies: int = MINIATURE_PLIES
    read_chunk_size: int = READ_CHUNK_SIZE
    # 0 disables the per-record size cap
    max_record_bytes: int = MAX_RECORD_BYTES
    lichess_api_url: str = LICHESS_API_URL
    lichess_timeout_seconds: float = LICHESS_TIMEOUT_SECONDS
    rate_limit_per_second: float = RATE_LIMIT_PER_SECOND
    rate_limit_burst: int = RATE_LIMIT_BURST

    @classmethod
    def from_env(cls) -> "RankConfig":
        """Re-read the environment, for callers that change it after import."""
        return cls(
            max_games=int(os.getenv("ACPL_MAX_GAMES", str(MAX_GAMES))),
            max_results=int(os.getenv("ACPL_MAX_RESULTS", str(MAX_RESULTS))),
            miniature_plies=int(os.getenv("ACPL_MINIATURE_PLIES", str(MINIATURE_PLIES))),
            read_chunk_size=int(os.getenv("ACPL_READ_CHUNK_SIZE", str(READ_CHUNK_SIZE))),
            max_record_bytes=int(os.getenv("ACPL_MAX_RECORD_BYTES", str(MAX_RECORD_BYTES))),
            lichess_api_url=os.getenv("LICHESS_API_URL", LICHESS_API_URL),
            lichess_timeout_seconds=float(
                os.getenv("LICHESS_TIMEOUT_SECONDS", str(LICHESS_TIMEOUT_SECONDS))
            ),
            rate_limit_per_second=float(
                os.getenv("RATE_LIMIT_PER_SECOND", str(RATE_LIMIT_PER_SECOND))
            ),
            rate_limit_burst=int(os.getenv("RATE_LIMIT_BURST", str(RATE_LIMIT_BURST))),
        )

    def with_overrides(self, **changes) -> "RankConfig":
        return replace(self, **changes)


DEFAULT_CONFIG = RankConfig()
