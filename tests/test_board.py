import random
from collections import Counter

import pytest

from zeetris.board import EmptyQueueError, GameData
from zeetris.pieces import BlockType, Point, RotationState

PLAYABLE = {BlockType.I, BlockType.J, BlockType.L, BlockType.O, BlockType.S, BlockType.Z, BlockType.T}


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def game(rng):
    data = GameData()
    data.new_bag(rng, 2)
    return data


def test_new_bag_produces_permutations(game):
    queue = list(game.next_queue)
    assert len(queue) == 14
    assert set(queue[:7]) == PLAYABLE
    assert set(queue[7:]) == PLAYABLE


def test_new_block_empty_queue_raises():
    with pytest.raises(EmptyQueueError):
        GameData().new_block()


def test_new_block_takes_from_queue(game):
    first = game.next_queue[0]
    game.new_block()
    assert game.current_block_type == first
    assert len(game.next_queue) == 13
    assert game.rotation_state == RotationState.ZERO


def test_new_block_spawns_at_anchor():
    data = GameData()
    data.new_block(BlockType.I)
    assert data.current_block.anchor == Point(20, 3)
    assert set(data.current_block.points) == {Point(20, x) for x in range(3, 7)}
    assert all(p.y == 0 for p in data.shadow_block.points)


def test_move_stops_at_wall():
    data = GameData()
    data.new_block(BlockType.I)
    results = [data.move((0, -1)) for _ in range(4)]
    assert results == [True, True, True, False]
    assert min(p.x for p in data.current_block.points) == 0


def test_move_down_until_landed_matches_shadow():
    data = GameData()
    data.new_block(BlockType.T)
    while data.move((-1, 0)):
        pass
    assert data.current_block == data.shadow_block


def test_check_rejects_out_of_bounds_and_occupied():
    data = GameData()
    data.new_block(BlockType.O)
    assert data.check(data.current_block)
    assert not data.check(data.current_block.translated((5, 0)))
    data.matrix[20][4] = BlockType.J
    assert not data.check(data.current_block)


def test_rotate_right_then_left_restores():
    data = GameData()
    data.new_block(BlockType.T)
    original = data.current_block
    assert data.rotate(RotationState.RIGHT)
    assert data.rotation_state == RotationState.RIGHT
    assert set(data.current_block.points) != set(original.points)
    assert data.rotate(RotationState.LEFT)
    assert data.rotation_state == RotationState.ZERO
    assert set(data.current_block.points) == set(original.points)


def test_four_rotations_return_to_start():
    data = GameData()
    data.new_block(BlockType.J)
    data.move((-5, 0))
    original = set(data.current_block.points)
    for _ in range(4):
        assert data.rotate(RotationState.LEFT)
    assert set(data.current_block.points) == original
    assert data.rotation_state == RotationState.ZERO


def test_rotate_invalid_direction():
    data = GameData()
    data.new_block(BlockType.T)
    with pytest.raises(ValueError):
        data.rotate(RotationState.TWO)


def test_blocked_rotation_leaves_piece():
    data = GameData()
    data.new_block(BlockType.T)
    while data.move((-1, 0)):
        pass
    before = data.current_block
    assert not data.rotate(RotationState.RIGHT)
    assert data.current_block == before
    assert data.rotation_state == RotationState.ZERO


def test_hard_drop_locks_to_floor(game):
    game.new_block(BlockType.I)
    game.hard_drop()
    assert game.matrix[0][3:7] == [BlockType.I] * 4
    assert game.current_block_type in PLAYABLE
    assert game.current_block.anchor == Point(20, 3)


def test_exchange_hold_once_per_piece(game):
    game.new_block()
    first = game.current_block_type
    second = game.next_queue[0]
    game.exchange_hold()
    assert game.hold_block_type == first
    assert game.current_block_type == second
    assert not game.can_exchange_hold
    game.exchange_hold()
    assert game.hold_block_type == first
    assert game.current_block_type == second


def test_exchange_hold_returns_held_piece(game):
    game.new_block()
    first = game.current_block_type
    game.exchange_hold()
    game.hard_drop()
    dropped_next = game.current_block_type
    game.exchange_hold()
    assert game.current_block_type == first
    assert game.hold_block_type == dropped_next


def test_clear_lines_drops_rows():
    data = GameData()
    data.matrix[0] = [BlockType.S] * GameData.width
    data.matrix[1][0] = BlockType.J
    assert data.clear_lines() == 1
    assert data.matrix[0][0] == BlockType.J
    assert data.matrix[1] == [BlockType.NONE] * GameData.width
    assert len(data.matrix) == GameData.height


def test_clear_lines_nothing_full():
    data = GameData()
    data.matrix[0][0] = BlockType.T
    assert data.clear_lines() == 0
    assert data.matrix[0][0] == BlockType.T


def test_logic_frame_gravity(game, rng):
    game.new_block(BlockType.I)
    start = game.current_block
    game.logic_frame(1, rng)
    assert game.current_block == start
    game.logic_frame(60, rng)
    assert game.current_block == start.translated((-1, 0))


def test_logic_frame_locks_after_delay(game, rng):
    game.new_block(BlockType.I)
    while game.move((-1, 0)):
        pass
    game.logic_frame(1, rng)
    assert game.on_land
    assert game.frame_stamp_lock == 1
    game.logic_frame(50, rng)
    assert game.matrix[0][3] == BlockType.NONE
    game.logic_frame(91, rng)
    assert game.matrix[0][3:7] == [BlockType.I] * 4


def test_logic_frame_refills_queue(rng):
    data = GameData()
    data.new_bag(rng)
    data.new_block(BlockType.O)
    data.logic_frame(1, rng)
    assert len(data.next_queue) == 14
    assert Counter(data.next_queue) == Counter({t: 2 for t in PLAYABLE})