import dataclasses

import pygame
import pytest

from snake import (
    APPLE_COLOR,
    CELL_COLOR,
    Cell,
    GameConfig,
    InvalidArgumentError,
    Vector2D,
)


def test_vector_to_string():
    assert str(Vector2D(3, 4)) == "3, 4"


def test_vector_set_pos_and_axes():
    v = Vector2D(0, 0)
    v.set_pos(7, 9)
    assert (v.x, v.y) == (7, 9)
    v.x = 1
    assert (v.x, v.y) == (1, 9)


def test_vector_copy_is_independent():
    v = Vector2D(1, 2)
    c = v.copy()
    c.x = 50
    assert v.x == 1
    assert c == Vector2D(50, 2)


def test_config_edge_length():
    assert GameConfig(screen_length=480, cells_per_row=48).edge_length == 10
    assert GameConfig(screen_length=500, cells_per_row=50).edge_length == 10


def test_config_is_frozen(config):
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.screen_length = 100


@pytest.mark.parametrize("field", ["screen_length", "cells_per_row", "tick_ms"])
def test_config_rejects_non_positive(field):
    with pytest.raises(InvalidArgumentError):
        GameConfig(**{field: 0})


def test_config_snap_and_tick_rate(config):
    assert config.snap(247) == 240
    assert config.snap(240) == 240
    assert config.ticks_per_second == 10


def test_cell_defaults_to_red(config):
    cell = Cell(Vector2D(0, 0), config=config)
    assert cell.color == CELL_COLOR
    assert cell.edge_length == 10


def test_cell_rejects_non_vector_position():
    with pytest.raises(InvalidArgumentError):
        Cell((10, 0))


def test_cell_rejects_non_string_color():
    with pytest.raises(InvalidArgumentError):
        Cell(Vector2D(0, 0), color=(255, 0, 0))

    cell = Cell(Vector2D(0, 0))
    with pytest.raises(InvalidArgumentError):
        cell.color = 5


def test_invalid_argument_is_a_value_error():
    assert issubclass(InvalidArgumentError, ValueError)


def test_cell_keeps_its_own_position():
    pos = Vector2D(10, 20)
    cell = Cell(pos)
    pos.x = 99
    assert cell.pos == Vector2D(10, 20)

    other = Cell(cell.pos)
    other.pos.x = 0
    assert cell.pos.x == 10


def test_cells_intersect_only_on_exact_match(config):
    origin = Cell(Vector2D(0, 0), config=config)
    assert origin.intersects(Cell(Vector2D(0, 0), config=config))
    assert not origin.intersects(Cell(Vector2D(10, 0), config=config))
    assert not origin.intersects(Cell(Vector2D(0, 10), config=config))
    assert not origin.intersects(Cell(Vector2D(0.5, 0), config=config))


def test_cell_draw_fills_square(config, surface):
    Cell(Vector2D(20, 30), APPLE_COLOR, config).draw(surface)

    assert surface.get_at((20, 30)) == pygame.Color(APPLE_COLOR)
    assert surface.get_at((29, 39)) == pygame.Color(APPLE_COLOR)
    assert surface.get_at((30, 40)) == pygame.Color(0, 0, 0)
    assert surface.get_at((19, 30)) == pygame.Color(0, 0, 0)
