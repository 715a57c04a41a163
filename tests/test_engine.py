from __future__ import annotations

import math
import random

import pytest

from headjump.config.settings import GameSettings
from headjump.game.engine import GameSession
from headjump.game.world import InvariantViolation, Obstacle, Rect


def started(settings: GameSettings) -> GameSession:
    s = GameSession(settings, validate=True)
    s.start_game()
    return s


def test_fresh_session_is_not_started(session: GameSession) -> None:
    assert not session.started
    assert not session.over
    assert session.score == 0
    assert session.world.obstacles == []
    assert session.world.player.vertical_position == session.settings.ground_line


def test_tick_spawn_and_jump_do_nothing_before_start(session: GameSession) -> None:
    assert session.trigger_jump() is False
    assert session.spawn() is None
    outcome = session.tick()

    assert outcome.scored == 0 and not outcome.collided
    assert session.world.obstacles == []
    assert session.world.player.vertical_velocity == 0.0


def test_standing_player_stays_on_ground(game_settings: GameSettings) -> None:
    s = started(game_settings)
    for _ in range(30):
        s.tick()

    player = s.world.player
    assert player.vertical_position == game_settings.ground_line
    assert player.vertical_velocity == 0.0
    assert not player.is_airborne


def test_jump_arc_returns_to_ground(game_settings: GameSettings) -> None:
    s = started(game_settings)
    assert s.trigger_jump() is True

    player = s.world.player
    assert player.vertical_velocity == game_settings.jump_strength
    assert player.is_airborne

    positions = [player.vertical_position]
    for _ in range(200):
        s.tick()
        positions.append(player.vertical_position)
        if not player.is_airborne:
            break

    assert not player.is_airborne
    assert player.vertical_position == game_settings.ground_line
    assert player.vertical_velocity == 0.0

    peak = positions.index(min(positions))
    assert 0 < peak < len(positions) - 1
    assert all(a > b for a, b in zip(positions[:peak], positions[1:peak + 1]))
    assert all(a <= b for a, b in zip(positions[peak:], positions[peak + 1:]))


def test_first_tick_applies_gravity_before_moving(game_settings: GameSettings) -> None:
    s = started(game_settings)
    s.trigger_jump()
    s.tick()

    player = s.world.player
    assert player.vertical_velocity == pytest.approx(-12.0 + 0.6)
    assert player.vertical_position == pytest.approx(270.0 - 11.4)


def test_jump_while_airborne_is_ignored(game_settings: GameSettings) -> None:
    s = started(game_settings)
    s.trigger_jump()
    s.tick()
    s.tick()
    velocity = s.world.player.vertical_velocity

    assert s.trigger_jump() is False
    assert s.world.player.vertical_velocity == velocity


def test_jump_tolerance_near_ground(game_settings: GameSettings, hover) -> None:
    s = started(game_settings)

    hover(s, game_settings.ground_line - 4)
    assert s.trigger_jump() is True

    hover(s, game_settings.ground_line - 6)
    assert s.trigger_jump() is False
    assert s.world.player.vertical_velocity == 0.0


def test_player_never_falls_through_floor(game_settings: GameSettings) -> None:
    rng = random.Random(7)
    s = started(game_settings)
    for _ in range(2000):
        if rng.random() < 0.1:
            s.trigger_jump()
        s.tick()
        assert s.world.player.vertical_position <= game_settings.ground_line


def test_spawn_appends_at_right_edge_with_unique_ids(game_settings: GameSettings) -> None:
    s = started(game_settings)
    first = s.spawn()
    second = s.spawn()

    assert first.horizontal_position == game_settings.field_width
    assert not first.scored
    assert first.id != second.id
    assert second.id > first.id
    assert s.world.obstacles == [first, second]


def test_obstacle_scrolls_and_is_pruned(hover) -> None:
    settings = GameSettings(gravity=0.0)
    s = started(settings)
    hover(s)
    s.spawn()

    s.tick()
    assert s.world.obstacles[0].horizontal_position == 795.0

    # x = 800 - 5k reaches -30 on tick 166
    for _ in range(164):
        s.tick()
    assert s.world.obstacles[0].horizontal_position == -25.0
    s.tick()
    assert s.world.obstacles == []


def test_obstacle_scores_once_when_crossing_leading_edge(hover) -> None:
    settings = GameSettings(gravity=0.0)
    s = started(settings)
    hover(s)
    obstacle = s.spawn()

    for _ in range(128):
        s.tick()
    assert obstacle.horizontal_position == 160.0
    assert not obstacle.scored
    assert s.score == 0

    outcome = s.tick()
    assert outcome.scored == 1
    assert obstacle.scored
    assert s.score == 1

    # (800 - 70) / 5 ticks after the spawn
    for _ in range(146 - 129):
        s.tick()
    assert s.score == 1

    for _ in range(30):
        s.tick()
    assert s.score == 1
    assert s.world.obstacles == []


def test_two_obstacles_crossing_in_one_tick_both_score(hover) -> None:
    settings = GameSettings(gravity=0.0, game_speed=50.0)
    s = started(settings)
    hover(s)
    s.world.obstacles = [Obstacle(id=1, horizontal_position=170.0), Obstacle(id=2, horizontal_position=200.0)]

    outcome = s.tick()

    assert outcome.scored == 2
    assert s.score == 2
    assert all(o.scored for o in s.world.obstacles)


def test_already_scored_obstacle_does_not_score_again(hover) -> None:
    settings = GameSettings(gravity=0.0)
    s = started(settings)
    hover(s)
    s.world.obstacles = [Obstacle(id=1, horizontal_position=162.0, scored=True)]

    s.tick()

    assert s.score == 0


def test_collision_with_standing_player_ends_run(game_settings: GameSettings) -> None:
    s = started(game_settings)
    s.world.obstacles = [Obstacle(id=1, horizontal_position=150.0)]

    outcome = s.tick()

    assert outcome.collided
    assert s.over
    assert s.started


def test_game_over_freezes_state(game_settings: GameSettings) -> None:
    s = started(game_settings)
    s.world.obstacles = [Obstacle(id=1, horizontal_position=150.0)]
    s.tick()
    assert s.over
    score = s.score
    position = s.world.obstacles[0].horizontal_position

    for _ in range(10):
        outcome = s.tick()
        assert not outcome.collided

    assert s.over
    assert s.score == score
    assert s.world.obstacles[0].horizontal_position == position
    assert s.spawn() is None
    assert s.trigger_jump() is False


def test_touching_edges_do_not_collide(game_settings: GameSettings) -> None:
    s = started(game_settings)
    # Lands exactly on the player's right edge (160) after one tick
    s.world.obstacles = [Obstacle(id=1, horizontal_position=165.0)]
    s.tick()
    assert not s.over

    s.tick()
    assert s.over


def test_vertical_clearance_is_strict(hover) -> None:
    settings = GameSettings(gravity=0.0)
    s = started(settings)

    # Player bottom exactly on the obstacle top
    hover(s, settings.obstacle_top - settings.player_height)
    s.world.obstacles = [Obstacle(id=1, horizontal_position=135.0)]
    s.tick()
    assert not s.over

    hover(s, settings.obstacle_top - settings.player_height + 0.5)
    s.tick()
    assert s.over


def test_collision_can_coincide_with_scoring(game_settings: GameSettings) -> None:
    s = started(game_settings)
    s.world.obstacles = [Obstacle(id=1, horizontal_position=160.0)]

    outcome = s.tick()

    assert outcome.scored == 1
    assert outcome.collided
    assert s.score == 1


@pytest.mark.parametrize("prepare", ["fresh", "mid_play", "over"])
def test_start_game_always_yields_fresh_run(game_settings: GameSettings, prepare: str) -> None:
    s = GameSession(game_settings)
    if prepare in ("mid_play", "over"):
        s.start_game()
        s.trigger_jump()
        s.spawn()
        s.tick()
        s.world.run.score = 3
    if prepare == "over":
        s.world.obstacles.append(Obstacle(id=99, horizontal_position=120.0))
        s.tick()
        assert s.over

    old_world = s.world
    s.start_game()

    assert s.world is not old_world
    assert s.score == 0
    assert s.world.obstacles == []
    assert s.started and not s.over
    player = s.world.player
    assert player.vertical_position == game_settings.ground_line
    assert player.vertical_velocity == 0.0
    assert not player.is_airborne


def test_rect_overlap_is_symmetric() -> None:
    a = Rect(0, 0, 10, 10)
    b = Rect(9, 9, 5, 5)
    c = Rect(10, 0, 5, 5)

    assert a.overlaps(b) and b.overlaps(a)
    assert not a.overlaps(c) and not c.overlaps(a)


def test_validate_flags_broken_state(session: GameSession) -> None:
    world = session.world
    world.validate(session.settings)

    world.run.score = -1
    with pytest.raises(InvariantViolation):
        world.validate(session.settings)
    world.run.score = 0

    world.player.vertical_position = math.nan
    with pytest.raises(InvariantViolation):
        world.validate(session.settings)

    world.player.vertical_position = session.settings.ground_line + 1
    with pytest.raises(InvariantViolation):
        world.validate(session.settings)

    world.player.vertical_position = session.settings.ground_line
    world.obstacles = [Obstacle(id=1, horizontal_position=10.0), Obstacle(id=1, horizontal_position=20.0)]
    with pytest.raises(InvariantViolation):
        world.validate(session.settings)
