import logging
import re
from itertools import accumulate, islice, repeat
from typing import Callable, List, Sequence, Tuple

from rotation.models import (
    CourtAssignment,
    InvalidPlayerCount,
    MatchAssignment,
    Mode,
    Schedule,
    ScheduleRequest,
    ScheduleResponse,
)

logger = logging.getLogger(__name__)

_DELIMITERS = re.compile(r"[\n,]+")

# (order of seat indices, seats sitting out this match)
_State = Tuple[Tuple[int, ...], Tuple[int, ...]]


def parse_player_names(raw: str) -> List[str]:
    """Split comma/newline separated text into trimmed, non-empty names.

    Duplicates are kept; a name is a seat, not a key.
    """
    return [token.strip() for token in _DELIMITERS.split(raw or "") if token.strip()]


def validate_player_names(names: Sequence[str], mode: Mode) -> None:
    if len(names) != mode.players:
        raise InvalidPlayerCount(mode.players, len(names))


def pick_sitting(order: Sequence[int], last_sitting: Sequence[int], count: int) -> Tuple[int, ...]:
    """First `count` seats of `order` that did not sit last match.

    When too few seats are eligible the rest are taken from last match's
    sitters, so the result always holds exactly `count` seats. The result
    keeps the iteration order of `order`.
    """
    chosen = [s for s in order if s not in last_sitting][:count]
    if len(chosen) < count:
        backfill = [s for s in order if s in last_sitting]
        chosen += backfill[: count - len(chosen)]
    chosen_set = set(chosen)
    return tuple(s for s in order if s in chosen_set)


def _advance(mode: Mode) -> Callable[[_State, object], _State]:
    def step(state: _State, _: object) -> _State:
        order, sitting = state
        order = order[1:] + order[:1]
        return order, pick_sitting(order, sitting, mode.sitting)

    return step


def _to_match(names: Sequence[str], mode: Mode, match_number: int, state: _State) -> MatchAssignment:
    order, sitting = state
    playing = [names[s] for s in order if s not in sitting]

    courts = tuple(
        CourtAssignment(
            court=c + 1,
            team1=tuple(playing[4 * c:4 * c + 2]),
            team2=tuple(playing[4 * c + 2:4 * c + 4]),
        )
        for c in range(mode.courts)
    )
    return MatchAssignment(
        match_index=match_number,
        courts=courts,
        sitting=tuple(names[s] for s in sitting),
    )


def generate_schedule(names: Sequence[str], num_matches: int, mode: Mode) -> Schedule:
    """Build the sit-out rotation for `num_matches` matches.

    Each match the first eligible players of the current order sit out,
    the rest fill the courts two by two, and the order is rotated left
    by one. Pure: the same input always yields the same schedule.
    """
    validate_player_names(names, mode)

    order = tuple(range(len(names)))
    initial: _State = (order, pick_sitting(order, (), mode.sitting))
    states = islice(accumulate(repeat(None), _advance(mode), initial=initial), max(num_matches, 0))
    matches = tuple(_to_match(names, mode, i, state) for i, state in enumerate(states, start=1))

    logger.debug("Generated %d matches for %s", len(matches), mode.value)
    return matches


def _join(players: Sequence[str]) -> str:
    return ", ".join(players)


def match_to_text(match: MatchAssignment) -> str:
    if len(match.courts) == 1:
        return (
            f"Match {match.match_index}: Team1 — {_join(match.team1)}, "
            f"Team2 — {_join(match.team2)}, Sit — {_join(match.sitting)}"
        )

    lines = [f"Match {match.match_index}:"]
    for court in match.courts:
        lines.append(
            f"  Court {court.court}: Team1 — {_join(court.team1)}, Team2 — {_join(court.team2)}"
        )
    lines.append(f"  Sit — {_join(match.sitting)}")
    return "\n".join(lines)


def schedule_to_text(schedule: Schedule) -> str:
    return "\n".join(match_to_text(m) for m in schedule)


def build_schedule(request: ScheduleRequest) -> ScheduleResponse:
    """Parse, validate and generate in one go; errors land in the response."""
    names = parse_player_names(request.raw_names)
    try:
        schedule = generate_schedule(names, request.num_matches, request.mode)
    except InvalidPlayerCount as e:
        logger.warning("Rejected %d names for %s: %s", e.actual, request.mode.value, e)
        return ScheduleResponse(request=request, players=names, error=str(e))

    return ScheduleResponse(
        request=request,
        players=names,
        schedule=schedule,
        text=schedule_to_text(schedule),
    )


def schedule_to_dict(schedule: Schedule) -> List[dict]:
    return [
        {
            "match": m.match_index,
            "courts": [
                {"court": c.court, "team1": list(c.team1), "team2": list(c.team2)}
                for c in m.courts
            ],
            "sitting": list(m.sitting),
        }
        for m in schedule
    ]
