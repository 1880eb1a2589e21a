from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class Mode(str, Enum):
    ONE_COURT = "one_court"    # 7 players, 1 court, 3 sit
    TWO_COURTS = "two_courts"  # 9 players, 2 courts, 1 sits

    @property
    def players(self) -> int:
        return 7 if self is Mode.ONE_COURT else 9

    @property
    def courts(self) -> int:
        return 1 if self is Mode.ONE_COURT else 2

    @property
    def sitting(self) -> int:
        return self.players - 4 * self.courts

    @property
    def label(self) -> str:
        if self is Mode.ONE_COURT:
            return "1 court / 7 players"
        return "2 courts / 9 players"


class InvalidPlayerCount(ValueError):
    """Parsed name count does not match what the mode needs."""

    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(f"Please enter exactly {required} names.")


@dataclass(frozen=True)
class CourtAssignment:
    court: int
    team1: Tuple[str, ...]
    team2: Tuple[str, ...]


@dataclass(frozen=True)
class MatchAssignment:
    match_index: int
    courts: Tuple[CourtAssignment, ...]
    sitting: Tuple[str, ...]

    @property
    def team1(self) -> Tuple[str, ...]:
        return self.courts[0].team1

    @property
    def team2(self) -> Tuple[str, ...]:
        return self.courts[0].team2

    @property
    def sit_player(self) -> Optional[str]:
        # single sitter in two-court mode
        return self.sitting[0] if len(self.sitting) == 1 else None


Schedule = Tuple[MatchAssignment, ...]


@dataclass
class ScheduleRequest:
    raw_names: str
    num_matches: int
    mode: Mode = Mode.ONE_COURT


@dataclass
class ScheduleResponse:
    request: ScheduleRequest
    players: List[str] = field(default_factory=list)
    schedule: Schedule = ()
    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
