"""
Lichess game export client.

Streams a user's analysed games as PGN and feeds them straight into the ACPL
ranker, so the export is never held in memory as a whole.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional
from urllib.parse import quote

import requests

from acpl import DEFAULT_CONFIG, RankConfig, ScoredGame, rank_by_acpl

logger = logging.getLogger(__name__)


class UpstreamStatusError(Exception):
    """Lichess answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"unexpected HTTP status {status_code} ({reason})")


def build_export_params(time_control: str, rated_only: bool, max_games: int) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "analysed": "true",
        "tags": "true",
        "clocks": "false",
        "evals": "true",
        "opening": "true",
        "literate": "false",
        "max": max_games,
    }
    if time_control:
        params["perfType"] = time_control
    if rated_only:
        params["rated"] = "true"
    return params


def export_url(username: str, config: RankConfig) -> str:
    return f"{config.lichess_api_url.rstrip('/')}/api/games/user/{quote(username, safe='')}"


@contextmanager
def open_game_stream(
    username: str,
    time_control: str,
    rated_only: bool,
    config: Optional[RankConfig] = None,
    session: Optional[requests.Session] = None,
) -> Iterator[Iterator[bytes]]:
    """
    Open the PGN export for ``username`` and yield its body as byte chunks.

    Raises:
        UpstreamStatusError: Lichess returned a non-2xx status
        requests.RequestException: the request itself failed
    """
    config = config or DEFAULT_CONFIG
    http = session or requests
    url = export_url(username, config)
    params = build_export_params(time_control, rated_only, config.max_games)

    logger.info(f"Fetching games for {username} from {url} ({params})")
    response = http.get(
        url,
        params=params,
        headers={"Accept": "application/x-chess-pgn"},
        stream=True,
        timeout=config.lichess_timeout_seconds,
    )
    try:
        if not 200 <= response.status_code < 300:
            raise UpstreamStatusError(response.status_code, response.reason or "")
        yield response.iter_content(chunk_size=config.read_chunk_size)
    finally:
        response.close()


def retrieve_results(
    username: str,
    time_control: str,
    rated_only: bool,
    min_plies: int,
    config: Optional[RankConfig] = None,
    session: Optional[requests.Session] = None,
) -> List[ScoredGame]:
    """Fetch ``username``'s analysed games and rank them by ACPL."""
    config = config or DEFAULT_CONFIG
    with open_game_stream(username, time_control, rated_only, config, session) as chunks:
        return rank_by_acpl(chunks, username, min_plies, config)
