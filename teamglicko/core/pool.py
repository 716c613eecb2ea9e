"""a named population of players rated together"""
import logging
from typing import Dict, Optional
import polars as pl
from teamglicko.config import Glicko2Config
from teamglicko.exceptions import ConfigurationError
from teamglicko.models.glicko2 import Player
from teamglicko.models.match import Match
from teamglicko.outcome import Outcome
from teamglicko.utils.data_utils import TeamMatchDataset

logger = logging.getLogger(__name__)


class RatingPool:
    """
    Keeps one Player per competitor name, all created from the same Glicko2Config.

    Attributes:
        config (Glicko2Config): defaults for players created by the pool
        players (dict): competitor name -> Player
    """

    def __init__(self, config: Optional[Glicko2Config] = None):
        self.config = config or Glicko2Config()
        self.players: Dict[str, Player] = {}

    def __len__(self):
        return len(self.players)

    def __contains__(self, name):
        return name in self.players

    def get(self, name: str) -> Player:
        """the player called name, created with default settings on first use"""
        if name not in self.players:
            self.players[name] = self.config.make_player()
        return self.players[name]

    def fit_batch(self, matchups, outcomes):
        """
        Reports every game of one rating period, then updates every player in the pool once.
        Players without games in the period only have their rating deviation increased.

        Parameters:
            matchups (list): (team_a_names, team_b_names) pairs, one per game
            outcomes (np.ndarray): 1.0, 0.0 or 0.5 for each game from team a's point of view
        """
        if len(matchups) != len(outcomes):
            raise ConfigurationError(f'got {len(matchups)} matchups but {len(outcomes)} outcomes')
        # nothing is logged until every game of the period is valid
        games = [
            (Match([self.get(name) for name in team_a], [self.get(name) for name in team_b]), Outcome.coerce(outcome))
            for (team_a, team_b), outcome in zip(matchups, outcomes)
        ]
        for match, outcome in games:
            match.report_outcome(outcome)
        for player in self.players.values():
            player.update_rating()

    def fit_dataset(self, dataset: TeamMatchDataset):
        """replay a dataset one rating period at a time"""
        for matchups, outcomes, time_step in dataset:
            self.fit_batch(matchups, outcomes)
            logger.debug('rating period %s: %d games, %d players', time_step, len(outcomes), len(self.players))

    def leaderboard(self) -> pl.DataFrame:
        """every player's snapshot sorted by rating, best first"""
        names = list(self.players)
        snapshots = [self.players[name].snapshot() for name in names]
        df = pl.DataFrame(
            {
                'competitor': names,
                'rating': [snapshot.rating for snapshot in snapshots],
                'rating_dev': [snapshot.rating_dev for snapshot in snapshots],
                'volatility': [snapshot.volatility for snapshot in snapshots],
            },
            schema={'competitor': pl.Utf8, 'rating': pl.Float64, 'rating_dev': pl.Float64, 'volatility': pl.Float64},
        )
        return df.sort('rating', descending=True)

    def print_leaderboard(self, num_places: int = 10):
        leaderboard = self.leaderboard().head(num_places)
        max_len = min(max([len(name) for name in leaderboard['competitor']] + [10]), 25)
        print(f'{"competitor": <{max_len}}\t{"rating": <10}\t{"rating_dev": <10}\t{"volatility"}')
        for name, rating, rating_dev, volatility in leaderboard.iter_rows():
            print(f'{name: <{max_len}}\t{rating: <10.2f}\t{rating_dev: <10.2f}\t{volatility:.6f}')
