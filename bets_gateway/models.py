from dataclasses import dataclass, field, fields
from typing import Dict

# Placeholder scores, every assembled bet reads "2x3"
HOME_TEAM_SCORE = 2
AWAY_TEAM_SCORE = 3

DEPENDENCIES = ("players", "matches", "championships")


def _omit_empty(obj) -> dict:
    return {
        f.metadata.get("json", f.name): getattr(obj, f.name)
        for f in fields(obj)
        if getattr(obj, f.name) not in ("", None)
    }


@dataclass(frozen=True)
class Bet:
    home_team_score: str = field(default="", metadata={"json": "homeTeamScore"})
    away_team_score: str = field(default="", metadata={"json": "awayTeamScore"})
    championship: str = ""
    match: str = ""
    email: str = ""

    def to_dict(self) -> dict:
        return _omit_empty(self)


@dataclass(frozen=True)
class BetSubmission:
    """The inbound request body. Accepted and validated, never persisted."""
    home_team_score: str = ""
    away_team_score: str = ""
    championship: str = ""
    match: str = ""
    email: str = ""

    @classmethod
    def from_dict(cls, data) -> "BetSubmission":
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        values = {}
        for f in fields(cls):
            key = _camel(f.name)
            value = data.get(key, "")
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise ValueError(f"field '{key}' must be a string")
            values[f.name] = value
        return cls(**values)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass(frozen=True)
class Match:
    home_team: str = ""
    away_team: str = ""
    championship: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Match":
        return cls(
            home_team=_as_str(data.get("homeTeam"), "homeTeam"),
            away_team=_as_str(data.get("awayTeam"), "awayTeam"),
            championship=_as_str(data.get("championship"), "championship"),
        )

    def __str__(self) -> str:
        return f"{self.home_team} {HOME_TEAM_SCORE}x{AWAY_TEAM_SCORE} {self.away_team}"


def _as_str(value, key: str = "") -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' is not a string")
    return value


@dataclass
class AggregateError:
    errors: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_statuses(cls, statuses: Dict[str, int]) -> "AggregateError":
        return cls(errors={name: statuses.get(name, 0) for name in DEPENDENCIES})

    def to_dict(self) -> dict:
        if not self.errors:
            return {}
        return {"errors": dict(self.errors)}


@dataclass(frozen=True)
class HealthStatus:
    status: str = "UP"

    def to_dict(self) -> dict:
        return {"status": self.status}
