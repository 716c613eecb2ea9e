"""
Models Module
=============

The Glicko 2 rating model and the team match built on top of it.

- Player: one competitor's rating, rating deviation and volatility plus the results logged in the current rating period.
- composite_player: collapses a team into a single pseudo player by a cumulative moving average.
- get_sigma_prime: the Illinois regula falsi search for the new volatility.
- Match: reports team results against the opposing composite and updates every participant.
"""
from teamglicko.models.glicko2 import ObservationLog, Player, RatingSnapshot, composite_player, get_sigma_prime
from teamglicko.models.match import Match, MatchState
