"""
Glicko 2
paper: http://www.glicko.net/research/dpcmsv.pdf
example: http://www.glicko.net/glicko/glicko2.pdf

Each Player keeps its own log of results for the current rating period and
applies them all at once in update_rating(). Teams are handled by playing
against a composite player, see http://rhetoricstudios.com/downloads/AbstractingGlicko2ForTeamGames.pdf
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence
import numpy as np
from teamglicko.exceptions import (
    ComputationError,
    ConfigurationError,
    EmptyGroupError,
    IncompatibleGroupError,
)
from teamglicko.outcome import Outcome
from teamglicko.utils.constants import EPSILON, MAX_ITER, SCALING_FACTOR
from teamglicko.utils.math_utils import g_scalar, g_vector, sigmoid, sigmoid_scalar

logger = logging.getLogger(__name__)


def f(x, delta2, phi2, v, a, tau2):
    """the function whose root is log(sigma'^2), step 5.1 of the paper"""
    ex = math.exp(x)
    phi2_v_ex = phi2 + v + ex
    num_1 = ex * (delta2 - phi2_v_ex)
    denom_1 = 2 * ((phi2_v_ex) ** 2.0)
    term_2 = (x - a) / tau2
    return (num_1 / denom_1) - term_2


def _check_finite(name, value):
    if not math.isfinite(value):
        logger.warning('volatility search produced %s = %r', name, value)
        raise ComputationError(f'{name} is not finite in the volatility search')
    return value


def get_sigma_prime(phi, tau, sigma, v, delta):
    """
    Solves for the new volatility with the Illinois variant of regula falsi.

    Parameters:
        phi (float): current rating deviation on the internal scale
        tau (float): system constant limiting the change in volatility
        sigma (float): current volatility
        v (float): estimated variance of the rating from the period's results
        delta (float): estimated improvement in rating from the period's results

    Returns:
        float: the new volatility sigma'

    Raises:
        ComputationError: if either search loop runs for MAX_ITER iterations, or if
            an intermediate value overflows to inf or nan. The bracketing loop has no
            termination guarantee for badly behaved inputs.
    """
    delta, v = float(delta), float(v)
    delta2 = delta * delta
    phi2 = phi**2.0
    tau2 = tau**2.0
    _check_finite('delta^2', delta2)
    A = a = math.log(sigma**2.0)
    if delta2 > (phi2 + v):
        B = math.log(delta2 - phi2 - v)
        _check_finite('upper bracket', B)
    else:
        k = 1
        while f(a - k * tau, delta2, phi2, v, a, tau2) < 0:
            k += 1
            if k > MAX_ITER:
                logger.warning('volatility bracket search hit %d iterations (phi=%r, v=%r, delta=%r)', MAX_ITER, phi, v, delta)
                raise ComputationError('could not bracket the new volatility')
        B = a - k * tau

    f_A = _check_finite('f(A)', f(A, delta2, phi2, v, a, tau2))
    f_B = _check_finite('f(B)', f(B, delta2, phi2, v, a, tau2))
    iters = 0
    while math.fabs(B - A) > EPSILON:
        C = _check_finite('C', A + ((A - B) * f_A) / (f_B - f_A))
        f_C = _check_finite('f(C)', f(C, delta2, phi2, v, a, tau2))
        if (f_C * f_B) < 0:
            A = B
            f_A = f_B
        else:
            f_A = f_A / 2.0
        B = C
        f_B = f_C
        iters += 1
        if iters >= MAX_ITER:
            logger.warning('volatility root search did not converge in %d iterations', MAX_ITER)
            raise ComputationError('volatility root search did not converge')
    logger.debug('volatility converged after %d iterations', iters)
    return math.exp(A / 2.0)


class ObservationLog:
    """
    The results a player has collected during the current rating period.

    Three parallel lists: the opponent's rating and rating deviation (both on
    the internal scale) and the outcome from the player's point of view.
    """

    def __init__(
        self,
        opponent_ratings: Optional[Sequence[float]] = None,
        opponent_rating_devs: Optional[Sequence[float]] = None,
        outcomes: Optional[Sequence[float]] = None,
    ):
        opponent_ratings = [] if opponent_ratings is None else list(opponent_ratings)
        opponent_rating_devs = [] if opponent_rating_devs is None else list(opponent_rating_devs)
        outcomes = [] if outcomes is None else [Outcome.coerce(outcome) for outcome in outcomes]
        if not len(opponent_ratings) == len(opponent_rating_devs) == len(outcomes):
            raise ConfigurationError(
                'opponent_ratings, opponent_rating_devs and outcomes must be of equal size, got '
                f'{len(opponent_ratings)}, {len(opponent_rating_devs)} and {len(outcomes)}'
            )
        self.opponent_ratings = opponent_ratings
        self.opponent_rating_devs = opponent_rating_devs
        self.outcomes = outcomes

    def __len__(self):
        return len(self.outcomes)

    def append(self, opponent_rating: float, opponent_rating_dev: float, outcome: Outcome):
        self.opponent_ratings.append(opponent_rating)
        self.opponent_rating_devs.append(opponent_rating_dev)
        self.outcomes.append(outcome)

    def as_arrays(self, dtype=np.float64):
        """(mus, phis, outcomes) as numpy arrays for the vectorized update"""
        return (
            np.asarray(self.opponent_ratings, dtype=dtype),
            np.asarray(self.opponent_rating_devs, dtype=dtype),
            np.asarray(self.outcomes, dtype=dtype),
        )


@dataclass(frozen=True)
class RatingSnapshot:
    """read only view of a player's rating on the display scale"""

    rating: float
    rating_dev: float
    volatility: float

    def to_dict(self) -> dict:
        return {'rating': self.rating, 'rating_dev': self.rating_dev, 'volatility': self.volatility}


class Player:
    """
    A competitor rated with Glicko 2, designed by Mark Glickman.

    Only the internal scale (mu, phi) is stored, the display scale rating and
    rating_dev are derived from it on every read.
    """

    def __init__(
        self,
        default_rating: float,
        rating: float,
        rating_dev: float,
        tau: float,
        volatility: float,
        opponent_ratings: Optional[Sequence[float]] = None,
        opponent_rating_devs: Optional[Sequence[float]] = None,
        outcomes: Optional[Sequence[float]] = None,
    ):
        """
        Parameters:
            default_rating (float): center of the display scale, e.g. 1500.0
            rating (float): rating on the display scale
            rating_dev (float): rating deviation on the display scale
            tau (float): system constant limiting the change in volatility over time
            volatility (float): expected fluctuation of the rating, e.g. 0.06
            opponent_ratings (list, optional): pre-seeded log, opponent mus on the internal scale
            opponent_rating_devs (list, optional): pre-seeded log, opponent phis on the internal scale
            outcomes (list, optional): pre-seeded log, outcomes for this player
        """
        self._tau = tau
        self._default_rating = default_rating
        self.mu = (rating - default_rating) / SCALING_FACTOR
        self.phi = rating_dev / SCALING_FACTOR
        self.sigma = volatility
        self._log = ObservationLog(opponent_ratings, opponent_rating_devs, outcomes)

    def __repr__(self):
        return (
            f'{self.__class__.__name__}(rating={self.rating!r}, rating_dev={self.rating_dev!r}, '
            f'volatility={self.volatility!r}, tau={self.tau!r}, default_rating={self.default_rating!r})'
        )

    @property
    def tau(self) -> float:
        return self._tau

    @property
    def default_rating(self) -> float:
        return self._default_rating

    @property
    def rating(self) -> float:
        return self.mu * SCALING_FACTOR + self._default_rating

    @property
    def rating_dev(self) -> float:
        return self.phi * SCALING_FACTOR

    @property
    def volatility(self) -> float:
        return self.sigma

    @property
    def opponent_ratings(self) -> List[float]:
        return list(self._log.opponent_ratings)

    @property
    def opponent_rating_devs(self) -> List[float]:
        return list(self._log.opponent_rating_devs)

    @property
    def outcomes(self) -> List[Outcome]:
        return list(self._log.outcomes)

    def has_played(self) -> bool:
        return len(self._log) > 0

    def is_compatible(self, other: 'Player') -> bool:
        """players can only be combined or matched up if they live on the same scale"""
        return other.tau == self.tau and other.default_rating == self.default_rating

    @classmethod
    def composite(cls, players: Sequence['Player']) -> 'Player':
        return composite_player(players)

    def add_result(self, opponent: 'Player', outcome):
        """log one result against opponent, nothing is updated until update_rating()"""
        if not self.is_compatible(opponent):
            raise IncompatibleGroupError('opponents must have equal tau and default_rating')
        self._log.append(opponent.mu, opponent.phi, Outcome.coerce(outcome))

    def expected_score(self, opponent: 'Player') -> float:
        """probability of beating opponent given the opponent's uncertainty"""
        return sigmoid_scalar(g_scalar(opponent.phi) * (self.mu - opponent.mu))

    def pre_rating_dev(self, sigma: float) -> float:
        """the rating deviation grown by one period of volatility, step 6 of the paper"""
        return math.sqrt(self.phi**2.0 + sigma**2.0)

    def update_rating(self):
        """
        Applies every result logged in this rating period and clears the log.
        A player with no results only has their rating deviation increased.
        Follows the steps in http://www.glicko.net/glicko/glicko2.pdf
        """
        if not self.has_played():
            self.phi = self.pre_rating_dev(self.sigma)
            return

        # steps 1 and 2 are the conversion to the internal scale at construction
        mus, phis, outcomes = self._log.as_arrays()
        gs = g_vector(phis)
        probs = sigmoid(gs * (self.mu - mus))

        # step 3
        info = (np.square(gs) * probs * (1.0 - probs)).sum()
        if not (info > 0.0 and np.isfinite(info)):
            logger.warning('degenerate variance for %r from %d results', self, len(self._log))
            raise ComputationError('estimated variance is not finite')
        v = 1.0 / info

        # step 4, this is kinda like a gradient
        grad = (gs * (outcomes - probs)).sum()
        delta = v * grad

        # step 5
        sigma_prime = get_sigma_prime(phi=self.phi, tau=self.tau, sigma=self.sigma, v=v, delta=delta)

        # step 6 and 7
        phi_star = self.pre_rating_dev(sigma_prime)
        phi_prime = 1.0 / math.sqrt((1.0 / (phi_star**2.0)) + (1.0 / v))
        mu_prime = self.mu + (phi_prime**2.0) * grad

        logger.debug('updated %r from %d results', self, len(self._log))
        self.mu = float(mu_prime)
        self.phi = float(phi_prime)
        self.sigma = sigma_prime
        self._log = ObservationLog()

    def snapshot(self) -> RatingSnapshot:
        return RatingSnapshot(rating=self.rating, rating_dev=self.rating_dev, volatility=self.volatility)

    def to_dict(self) -> dict:
        """the snapshot plus the results logged in the current period"""
        return {
            **self.snapshot().to_dict(),
            'opponent_ratings': self.opponent_ratings,
            'opponent_rating_devs': self.opponent_rating_devs,
            'outcomes': [float(outcome) for outcome in self.outcomes],
        }


def composite_player(players: Sequence[Player]) -> Player:
    """
    Collapses a team into one pseudo player whose rating and rating deviation are
    the cumulative moving average over the team, in order.

    The volatility is copied from the first player and is not meaningful.
    """
    if len(players) == 0:
        raise EmptyGroupError('cannot create a composite of 0 players')
    ref_player = players[0]
    rating = 0.0
    rating_dev = 0.0
    for idx, player in enumerate(players):
        if not ref_player.is_compatible(player):
            raise IncompatibleGroupError('all players must have equal tau and default_rating')
        rating = rating + (player.rating - rating) / (idx + 1)
        rating_dev = rating_dev + (player.rating_dev - rating_dev) / (idx + 1)
    return Player(
        default_rating=ref_player.default_rating,
        rating=rating,
        rating_dev=rating_dev,
        tau=ref_player.tau,
        volatility=ref_player.volatility,
    )
