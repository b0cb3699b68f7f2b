from .aggregator import AggregateResult
from .models import Bet, HOME_TEAM_SCORE, AWAY_TEAM_SCORE


def assemble_bet(result: AggregateResult) -> Bet:
    """Build the response bet from a successful aggregate."""
    return Bet(
        home_team_score=str(HOME_TEAM_SCORE),
        away_team_score=str(AWAY_TEAM_SCORE),
        championship=result.championship,
        match=str(result.match),
        email=result.email,
    )
