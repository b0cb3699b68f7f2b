import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from .errors import AggregationFailed, UpstreamDecodeError, UpstreamTransportError
from .models import AggregateError, Match
from .upstream import UpstreamClient, UpstreamResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateResult:
    match: Match
    email: str
    championship: str


class BetAggregator:
    """
    Fetches the match, player and championship behind a bet submission.

    The three upstream calls are independent, so they are issued in parallel
    and joined before deciding. Any failure fails the whole aggregate.
    """

    def __init__(self, client: UpstreamClient, match_url: str, player_url: str,
                 championship_url: str, timeout: float = 15.0):
        self.client = client
        self.match_url = match_url
        self.player_url = player_url
        self.championship_url = championship_url
        self.timeout = timeout

    @classmethod
    def from_config(cls, client: UpstreamClient, config) -> "BetAggregator":
        return cls(
            client,
            match_url=config['MATCH_SVC'],
            player_url=config['PLAYER_SVC'],
            championship_url=config['CHAMPIONSHIP_SVC'],
            timeout=config['AGGREGATE_TIMEOUT'],
        )

    # ==================== Call sites ====================

    def fetch_match(self, headers: Dict[str, str]) -> Tuple[Match, UpstreamResult]:
        result = self.client.fetch('matches', self.match_url, headers)
        if not result.ok:
            return None, result
        try:
            return Match.from_dict(result.payload), result
        except ValueError as e:
            error = UpstreamDecodeError('matches', self.match_url, str(e))
            logger.error(f"failed to read matches response body: {error.reason}")
            return None, UpstreamResult(status=0, error=error)

    def fetch_player(self, headers: Dict[str, str]) -> Tuple[str, UpstreamResult]:
        return self._fetch_field('players', self.player_url, 'email', headers)

    def fetch_championship(self, headers: Dict[str, str]) -> Tuple[str, UpstreamResult]:
        return self._fetch_field('championships', self.championship_url, 'title', headers)

    def _fetch_field(self, service: str, url: str, key: str,
                     headers: Dict[str, str]) -> Tuple[str, UpstreamResult]:
        result = self.client.fetch(service, url, headers)
        if not result.ok:
            return '', result
        value = result.payload.get(key)
        if value is not None and not isinstance(value, str):
            error = UpstreamDecodeError(service, url, f"field '{key}' is not a string")
            logger.error(f"failed to read {service} response body: {error.reason}")
            return '', UpstreamResult(status=0, error=error)
        return value or '', result

    # ==================== Fan-out / fan-in ====================

    def aggregate(self, headers: Dict[str, str]) -> AggregateResult:
        """
        Run the three fetches concurrently and wait for all of them.

        Raises AggregationFailed when any call failed or did not finish
        within ``self.timeout``; the error maps every dependency to the
        status it returned (0 when none was received).
        """
        calls: Dict[str, Callable] = {
            'matches': self.fetch_match,
            'players': self.fetch_player,
            'championships': self.fetch_championship,
        }
        values = {}
        statuses = {}
        causes = {}

        executor = ThreadPoolExecutor(max_workers=len(calls), thread_name_prefix='upstream')
        try:
            futures = {name: executor.submit(call, headers) for name, call in calls.items()}
            done, _ = wait(futures.values(), timeout=self.timeout)

            for name, future in futures.items():
                if future not in done:
                    future.cancel()
                    logger.warning(f"{name} did not answer within {self.timeout}s")
                    statuses[name] = 0
                    causes[name] = UpstreamTransportError(name, '', f"timed out after {self.timeout}s")
                    continue

                value, result = future.result()
                statuses[name] = result.status
                if result.ok:
                    values[name] = value
                else:
                    causes[name] = result.error
        finally:
            # Stragglers are bounded by the client's own timeout
            executor.shutdown(wait=False)

        if causes:
            error = AggregateError.from_statuses(statuses)
            logger.warning(f"aggregation failed: {error.errors}")
            raise AggregationFailed(error, causes)

        return AggregateResult(
            match=values['matches'],
            email=values['players'],
            championship=values['championships'],
        )
