import numpy as np
import polars as pl
import pytest
from teamglicko import (
    ConfigurationError,
    Glicko2Config,
    InvalidMatchError,
    InvalidOutcomeError,
    Match,
    RatingPool,
    TeamMatchDataset,
)


def make_df():
    return pl.DataFrame(
        {
            'a_1': ['ann', 'ann', 'cat', 'ann'],
            'a_2': ['bob', 'bob', None, 'cat'],
            'b_1': ['cat', 'dan', 'dan', 'bob'],
            'b_2': ['dan', None, 'eve', 'dan'],
            'outcome': [1.0, 0.5, 0.0, 1.0],
            'period': [0, 0, 1, 2],
        }
    )


def test_dataset_from_dataframe():
    dataset = TeamMatchDataset(make_df(), ['a_1', 'a_2'], ['b_1', 'b_2'], 'outcome', 'period', verbose=False)
    assert len(dataset) == 4
    assert dataset.competitors == ['ann', 'bob', 'cat', 'dan', 'eve']
    periods = list(dataset)
    assert [time_step for _, _, time_step in periods] == [0, 1, 2]
    matchups, outcomes, _ = periods[0]
    assert matchups == [(('ann', 'bob'), ('cat', 'dan')), (('ann', 'bob'), ('dan',))]
    np.testing.assert_array_equal(outcomes, [1.0, 0.5])
    matchups, _, _ = periods[1]
    assert matchups == [(('cat',), ('dan', 'eve'))]


def test_dataset_must_be_sorted():
    with pytest.raises(ConfigurationError):
        TeamMatchDataset.init_from_arrays(
            team_a=[['ann'], ['bob']], team_b=[['bob'], ['ann']], outcomes=[1.0, 0.0], time_steps=[1, 0]
        )


def test_dataset_lengths_must_match():
    with pytest.raises(ConfigurationError):
        TeamMatchDataset.init_from_arrays(team_a=[['ann'], ['bob']], team_b=[['bob']], outcomes=[1.0, 0.0])


def test_fit_dataset_matches_manual_updates():
    dataset = TeamMatchDataset.init_from_arrays(
        team_a=[['ann', 'bob'], ['ann']],
        team_b=[['cat', 'dan'], ['dan']],
        outcomes=[1.0, 0.0],
        time_steps=[0, 0],
    )
    pool = RatingPool()
    pool.fit_dataset(dataset)

    config = Glicko2Config()
    ann, bob, cat, dan = (config.make_player() for _ in range(4))
    Match([ann, bob], [cat, dan]).report_team_a_won()
    Match(ann, dan).report_team_b_won()
    for player in (ann, bob, cat, dan):
        player.update_rating()

    for name, player in zip(['ann', 'bob', 'cat', 'dan'], [ann, bob, cat, dan]):
        assert pool.get(name).rating == pytest.approx(player.rating)
        assert pool.get(name).rating_dev == pytest.approx(player.rating_dev)
        assert pool.get(name).volatility == pytest.approx(player.volatility)


def test_idle_players_grow_rating_dev():
    dataset = TeamMatchDataset.init_from_arrays(
        team_a=[['ann'], ['cat']],
        team_b=[['bob'], ['dan']],
        outcomes=[1.0, 1.0],
        time_steps=[0, 1],
    )
    pool = RatingPool(Glicko2Config(default_rating_dev=200.0))
    periods = iter(dataset)
    matchups, outcomes, _ = next(periods)
    pool.fit_batch(matchups, outcomes)
    ann_rating, ann_dev = pool.get('ann').rating, pool.get('ann').rating_dev
    matchups, outcomes, _ = next(periods)
    pool.fit_batch(matchups, outcomes)
    assert pool.get('ann').rating == pytest.approx(ann_rating)
    assert pool.get('ann').rating_dev > ann_dev


def test_leaderboard():
    pool = RatingPool()
    dataset = TeamMatchDataset(make_df(), ['a_1', 'a_2'], ['b_1', 'b_2'], 'outcome', 'period', verbose=False)
    pool.fit_dataset(dataset)
    assert len(pool) == 5
    assert 'eve' in pool
    leaderboard = pool.leaderboard()
    assert leaderboard.columns == ['competitor', 'rating', 'rating_dev', 'volatility']
    assert leaderboard.height == 5
    ratings = leaderboard['rating'].to_list()
    assert ratings == sorted(ratings, reverse=True)
    best = leaderboard.row(0, named=True)
    assert best['rating'] == pytest.approx(pool.get(best['competitor']).rating)


def test_print_leaderboard(capsys):
    pool = RatingPool()
    pool.get('ann')
    pool.get('bob')
    pool.print_leaderboard(num_places=1)
    lines = capsys.readouterr().out.strip().split('\n')
    assert len(lines) == 2
    assert lines[0].startswith('competitor')


@pytest.mark.parametrize(
    'matchups, outcomes',
    [
        ([(['ann'], ['bob']), (['ann'], ['cat'])], [1.0, 2.0]),
        ([(['ann'], ['bob']), ([], ['cat'])], [1.0, 0.0]),
        ([(['ann'], ['bob'])], [1.0, 0.0]),
    ],
)
def test_failed_batch_logs_nothing(matchups, outcomes):
    pool = RatingPool()
    with pytest.raises((InvalidOutcomeError, InvalidMatchError, ConfigurationError)):
        pool.fit_batch(matchups, outcomes)
    assert not any(player.has_played() for player in pool.players.values())

    pool.get('ann')
    # a later period without ann only grows ann's rating deviation
    pool.fit_batch([(['bob'], ['cat'])], [1.0])
    assert pool.get('ann').rating == pytest.approx(1500.0)
    assert pool.get('ann').rating_dev > 350.0
