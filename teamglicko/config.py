"""default settings for new players"""
from dataclasses import dataclass
from teamglicko.models.glicko2 import Player


@dataclass(frozen=True)
class Glicko2Config:
    """
    System wide defaults shared by every player created from it.

    Attributes:
        default_rating (float): center of the display scale and the rating of a new player
        default_rating_dev (float): rating deviation of a new player
        default_volatility (float): volatility of a new player
        tau (float): system constant limiting the change in volatility, 0.3 to 1.2 is sensible
    """

    default_rating: float = 1500.0
    default_rating_dev: float = 350.0
    default_volatility: float = 0.06
    tau: float = 0.5

    def make_player(
        self,
        rating: float = None,
        rating_dev: float = None,
        volatility: float = None,
        opponent_ratings=None,
        opponent_rating_devs=None,
        outcomes=None,
    ) -> Player:
        return Player(
            default_rating=self.default_rating,
            rating=self.default_rating if rating is None else rating,
            rating_dev=self.default_rating_dev if rating_dev is None else rating_dev,
            tau=self.tau,
            volatility=self.default_volatility if volatility is None else volatility,
            opponent_ratings=opponent_ratings,
            opponent_rating_devs=opponent_rating_devs,
            outcomes=outcomes,
        )


def create_player_factory(**kwargs):
    """returns a function making players with the given Glicko2Config defaults"""
    return Glicko2Config(**kwargs).make_player
