import pytest

from buttercat_othello.geometry import (
    CORNERS,
    DIRECTIONS,
    Position,
    edge_squares,
    is_central,
    is_corner,
    is_edge,
    position_value,
    ray,
)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (8, 3), (3, 8)])
def test_position_rejects_off_board(x, y):
    with pytest.raises(ValueError):
        Position(x, y)


def test_step_stops_at_the_edge():
    assert Position(0, 0).step(-1, 0) is None
    assert Position(0, 0).step(1, 1) == Position(1, 1)
    assert Position(7, 7).step(0, 1) is None


def test_directions_cover_all_neighbors():
    assert len(set(DIRECTIONS)) == 8
    assert (0, 0) not in DIRECTIONS


def test_central_zone_is_inner_four_by_four():
    central = [Position(x, y) for x in range(8) for y in range(8) if is_central(Position(x, y))]
    assert len(central) == 16
    assert is_central(Position(2, 2))
    assert is_central(Position(5, 5))
    assert not is_central(Position(1, 2))
    assert not is_central(Position(6, 3))


def test_corners_and_edges():
    assert set(CORNERS) == {Position(0, 0), Position(7, 0), Position(0, 7), Position(7, 7)}
    assert all(is_corner(pos) for pos in CORNERS)
    assert not is_corner(Position(1, 0))
    assert is_edge(Position(0, 4))
    assert not is_edge(Position(1, 1))
    assert len(edge_squares()) == 28


def test_position_weights():
    assert position_value(Position(0, 0)) == 100
    assert position_value(Position(1, 1)) == -50
    assert position_value(Position(7, 0)) == 100
    assert position_value(Position(3, 3)) == 0


def test_ray_walks_until_the_edge():
    assert list(ray(Position(0, 0), 1, 1)) == [Position(i, i) for i in range(1, 8)]
    assert list(ray(Position(0, 3), -1, 0)) == []
