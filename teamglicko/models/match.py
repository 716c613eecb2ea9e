"""
Team vs team matches on top of Glicko 2.

Every report adds one result per player on each side, each played against the
composite of the other side, so the pairwise glicko 2 math applies unchanged.
paper: http://rhetoricstudios.com/downloads/AbstractingGlicko2ForTeamGames.pdf
"""
import logging
from enum import Enum
from typing import List, Sequence, Union
from teamglicko.exceptions import IncompatibleGroupError, InvalidMatchError
from teamglicko.models.glicko2 import Player, composite_player
from teamglicko.outcome import Outcome, negate_outcome, outcome_from_scores

logger = logging.getLogger(__name__)

MatchOpponent = Union[Player, Sequence[Player]]


class MatchState(Enum):
    OPEN = 'open'
    REPORTED = 'reported'
    UPDATED = 'updated'


def _as_team(side: MatchOpponent) -> List[Player]:
    if side is None:
        raise InvalidMatchError('each team must consist of at least one player')
    if isinstance(side, Player):
        return [side]
    try:
        team = list(side)
    except TypeError:
        raise InvalidMatchError(f'a team must be a Player or a sequence of players, got {side!r}') from None
    if len(team) < 1:
        raise InvalidMatchError('each team must consist of at least one player')
    if not all(isinstance(player, Player) for player in team):
        raise InvalidMatchError('every member of a team must be a Player')
    return team


class Match:
    """
    A match between two teams (or two single players) that may span several games.

    Outcomes are always given from team a's point of view.
    """

    def __init__(self, team_a: MatchOpponent, team_b: MatchOpponent):
        self.team_a = _as_team(team_a)
        self.team_b = _as_team(team_b)
        ref_player = self.team_a[0]
        if not all(ref_player.is_compatible(player) for player in self.participants):
            raise IncompatibleGroupError('all players in a match must have equal tau and default_rating')
        self.state = MatchState.OPEN
        self.num_reports = 0

    @property
    def participants(self) -> List[Player]:
        """every distinct player in the match, team a first"""
        seen = set()
        participants = []
        for player in self.team_a + self.team_b:
            if id(player) not in seen:
                seen.add(id(player))
                participants.append(player)
        return participants

    @property
    def composite_a(self) -> Player:
        return composite_player(self.team_a)

    @property
    def composite_b(self) -> Player:
        return composite_player(self.team_b)

    def report_outcome(self, outcome):
        """log one game result for every player, no ratings change until update_ratings()"""
        outcome = Outcome.coerce(outcome)
        composite_a = self.composite_a
        composite_b = self.composite_b
        for player in self.team_a:
            player.add_result(composite_b, outcome)
        opposite_outcome = negate_outcome(outcome)
        for player in self.team_b:
            player.add_result(composite_a, opposite_outcome)
        self.state = MatchState.REPORTED
        self.num_reports += 1

    def report_team_a_won(self):
        self.report_outcome(Outcome.WIN)

    def report_team_b_won(self):
        self.report_outcome(Outcome.LOSS)

    def report_tie(self):
        self.report_outcome(Outcome.TIE)

    def report_scores(self, a_score, b_score):
        """e.g. report_scores(3, 1) is a win for team a"""
        self.report_outcome(outcome_from_scores(a_score, b_score))

    def update_ratings(self):
        """ends the rating period for everyone in the match"""
        participants = self.participants
        for player in participants:
            player.update_rating()
        logger.debug('updated %d players after %d reports', len(participants), self.num_reports)
        self.state = MatchState.UPDATED
        self.num_reports = 0
