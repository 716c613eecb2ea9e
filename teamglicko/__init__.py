"""Glicko 2 ratings for players and teams"""
from teamglicko.config import Glicko2Config, create_player_factory
from teamglicko.core.pool import RatingPool
from teamglicko.exceptions import (
    ComputationError,
    ConfigurationError,
    EmptyGroupError,
    IncompatibleGroupError,
    InvalidMatchError,
    InvalidOutcomeError,
    TeamGlickoError,
)
from teamglicko.models.glicko2 import ObservationLog, Player, RatingSnapshot, composite_player, get_sigma_prime
from teamglicko.models.match import Match, MatchState
from teamglicko.outcome import Outcome, negate_outcome, outcome_from_scores
from teamglicko.utils.data_utils import TeamMatchDataset

__all__ = [
    'ComputationError',
    'ConfigurationError',
    'EmptyGroupError',
    'Glicko2Config',
    'IncompatibleGroupError',
    'InvalidMatchError',
    'InvalidOutcomeError',
    'Match',
    'MatchState',
    'ObservationLog',
    'Outcome',
    'Player',
    'RatingPool',
    'RatingSnapshot',
    'TeamGlickoError',
    'TeamMatchDataset',
    'composite_player',
    'create_player_factory',
    'get_sigma_prime',
    'negate_outcome',
    'outcome_from_scores',
]
