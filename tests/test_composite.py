import pytest
from teamglicko import EmptyGroupError, IncompatibleGroupError, Player, composite_player, create_player_factory

create_player = create_player_factory()


def test_composite_of_one():
    player = create_player(rating=1623.4, rating_dev=87.1, volatility=0.09)
    composite = composite_player([player])
    assert composite.rating == pytest.approx(player.rating, rel=1e-12)
    assert composite.rating_dev == pytest.approx(player.rating_dev, rel=1e-12)


def test_composite_of_two():
    a_player = create_player()
    b_player = create_player(rating=1600.0, rating_dev=300.0, volatility=0.09)
    composite = Player.composite([a_player, b_player])
    assert composite.rating == pytest.approx(1550.0)
    assert composite.rating_dev == pytest.approx(325.0)
    # volatility of a composite is taken from the first player
    assert composite.volatility == 0.06
    assert composite.tau == a_player.tau
    assert composite.default_rating == a_player.default_rating
    assert not composite.has_played()


def test_composite_is_cumulative_moving_average():
    ratings = [1501.1, 1702.3, 1333.3, 1999.9, 1234.5, 1600.7]
    devs = [31.0, 350.0, 77.7, 123.4, 200.2, 99.9]
    players = [create_player(rating=rating, rating_dev=dev) for rating, dev in zip(ratings, devs)]
    rating, rating_dev = 0.0, 0.0
    for idx, player in enumerate(players):
        rating = rating + (player.rating - rating) / (idx + 1)
        rating_dev = rating_dev + (player.rating_dev - rating_dev) / (idx + 1)
    expected = create_player(rating=rating, rating_dev=rating_dev)
    composite = composite_player(players)
    assert composite.mu == expected.mu
    assert composite.phi == expected.phi


def test_composite_does_not_touch_members():
    team = [create_player(rating=1400.0), create_player(rating=1800.0)]
    composite_player(team)
    assert [player.rating for player in team] == pytest.approx([1400.0, 1800.0])
    assert not any(player.has_played() for player in team)


def test_composite_empty():
    with pytest.raises(EmptyGroupError):
        composite_player([])


@pytest.mark.parametrize('config', [{'default_rating': 1600.0}, {'tau': 0.8}])
def test_composite_incompatible(config):
    a_player = create_player()
    b_player = create_player_factory(**config)()
    with pytest.raises(IncompatibleGroupError):
        composite_player([a_player, b_player])
    with pytest.raises(IncompatibleGroupError):
        composite_player([a_player, a_player, b_player])
