import random

import pytest

from dotwalk.components.animation_state import AnimationPhase
from dotwalk.components.cell import DotColor
from dotwalk.events.bus import (
    EVENT_CASCADE_COMPLETE,
    EVENT_CELL_INTENT,
    EVENT_PATH_CANCEL,
    EVENT_PATH_COMMITTED,
    EVENT_PATH_CONFIRM,
    EVENT_PATH_EXTENDED,
    EVENT_STATE_CHANGED,
    EVENT_TICK,
    EventBus,
)
from dotwalk.systems.game_controller import GameController
from dotwalk.systems.grid_ops import cell_at, column_dot_counts, empty_positions
from dotwalk.utils.scheduler import TickScheduler
from dotwalk.world import create_world
from helpers import drive_ticks, paint_board, receiver_counts

R, G, B = DotColor.RED, DotColor.GREEN, DotColor.BLUE


@pytest.fixture
def small_game():
    """3x3 board, all red, character on the empty center (1,1)."""
    bus = EventBus()
    world = create_world(size=3, rng=random.Random(17))
    paint_board(world, R, empty=[(1, 1)])
    controller = GameController(world, bus)
    return bus, world, controller


def test_scenario_walk_commit_and_refill(small_game):
    bus, world, controller = small_game
    controller.on_cell_intent(2, 1)
    snap = controller.snapshot()
    assert snap.path == ((1, 1), (2, 1))
    assert snap.locked_color is R

    controller.on_cell_intent(0, 0)
    assert controller.snapshot().path == ((1, 1), (2, 1))

    controller.on_cell_intent(1, 0)
    assert controller.snapshot().path == ((1, 1), (2, 1), (1, 0))

    controller.confirm()
    snap = controller.snapshot()
    assert snap.animation.phase is AnimationPhase.ANIMATING
    assert snap.animation.step == 0
    assert snap.walker == (1, 1)

    drive_ticks(bus)
    snap = controller.snapshot()
    assert snap.animating
    assert snap.walker == (2, 1)
    assert snap.consumed == ((2, 1),)
    assert snap.character == (1, 1)

    # One tick per walked cell: reaching (1,0) commits.
    drive_ticks(bus)
    snap = controller.snapshot()
    assert snap.animation.phase is AnimationPhase.IDLE
    assert snap.character == (1, 0)
    assert snap.path == ((1, 0),)
    assert snap.locked_color is None
    assert snap.cell(1, 0).is_empty
    assert not snap.cell(1, 1).is_empty
    assert not snap.cell(2, 1).is_empty
    # (2,0) dropped into (2,1) and a fresh dot entered at the top.
    assert snap.cell(2, 1).color is R
    assert empty_positions(world) == [(1, 0)]
    assert column_dot_counts(world) == [3, 2, 3]


def test_confirm_with_anchor_only_never_animates(small_game):
    bus, _, controller = small_game
    controller.confirm()
    assert not controller.snapshot().animating
    drive_ticks(bus, 5)
    assert controller.snapshot().character == (1, 1)


def test_cancel_from_idle_resets_to_anchor(small_game):
    _, _, controller = small_game
    controller.on_cell_intent(2, 1)
    controller.on_cell_intent(2, 2)
    assert len(controller.snapshot().path) == 3
    controller.cancel()
    snap = controller.snapshot()
    assert snap.path == ((1, 1),)
    assert snap.locked_color is None


def test_intents_are_dropped_while_animating(small_game):
    bus, _, controller = small_game
    controller.on_cell_intent(2, 1)
    controller.on_cell_intent(2, 2)
    controller.confirm()
    controller.on_cell_intent(1, 2)
    controller.cancel()
    controller.confirm()
    snap = controller.snapshot()
    assert snap.path == ((1, 1), (2, 1), (2, 2))
    assert snap.animation.step == 0
    drive_ticks(bus)
    assert controller.snapshot().animation.step == 1


def test_tick_while_idle_is_noop(small_game):
    _, _, controller = small_game
    before = controller.snapshot()
    controller.tick()
    assert controller.snapshot() == before


def test_manual_tick_replaces_scheduled_tick(small_game):
    bus, _, controller = small_game
    controller.on_cell_intent(2, 1)
    controller.on_cell_intent(2, 2)
    controller.confirm()
    controller.tick()
    assert controller.snapshot().animation.step == 1
    # The cancelled timer must not advance the walk a second time.
    drive_ticks(bus, 1, dt=0.1)
    assert controller.snapshot().animation.step == 1


def test_out_of_range_and_empty_intents_are_ignored(small_game):
    _, _, controller = small_game
    controller.on_cell_intent(5, 5)
    controller.on_cell_intent(-1, 0)
    controller.on_cell_intent(1, 1)
    assert controller.snapshot().path == ((1, 1),)


def test_wrong_color_is_ignored():
    bus = EventBus()
    world = create_world(size=3, rng=random.Random(3))
    paint_board(world, R, empty=[(1, 1)])
    cell_at(world, 2, 2).color = B
    controller = GameController(world, bus)
    controller.on_cell_intent(2, 1)
    controller.on_cell_intent(2, 2)
    assert controller.snapshot().path == ((1, 1), (2, 1))


def test_bus_intents_reach_controller(small_game):
    bus, _, controller = small_game
    extended = []
    bus.subscribe(EVENT_PATH_EXTENDED, lambda s, **k: extended.append(k["path"]))
    bus.emit(EVENT_CELL_INTENT, x=0, y=1)
    bus.emit(EVENT_CELL_INTENT, x="bad", y=1)
    bus.emit(EVENT_CELL_INTENT, y=1)
    assert extended == [((1, 1), (0, 1))]
    bus.emit(EVENT_PATH_CANCEL)
    assert controller.snapshot().path == ((1, 1),)
    bus.emit(EVENT_CELL_INTENT, x=0, y=1)
    bus.emit(EVENT_PATH_CONFIRM)
    assert controller.snapshot().animating


def test_commit_emits_events_and_snapshots(small_game):
    bus, _, controller = small_game
    committed = {}
    cascades = {}
    snapshots = []
    bus.subscribe(EVENT_PATH_COMMITTED, lambda s, **k: committed.update(k))
    bus.subscribe(EVENT_CASCADE_COMPLETE, lambda s, **k: cascades.update(k))
    bus.subscribe(EVENT_STATE_CHANGED, lambda s, **k: snapshots.append(k["snapshot"]))
    controller.on_cell_intent(0, 1)
    controller.confirm()
    drive_ticks(bus, 2)
    assert committed == {"path": ((1, 1), (0, 1)), "character": (0, 1)}
    # Column 0 holds the new character cell; only the old center needs a dot.
    assert cascades["refilled"] == [(1, 0)]
    assert [s.animation.phase for s in snapshots] == [
        AnimationPhase.IDLE,
        AnimationPhase.ANIMATING,
        AnimationPhase.IDLE,
    ]
    assert snapshots[-1].character == (0, 1)


def test_dispose_stops_pending_walk(small_game):
    bus, _, controller = small_game
    controller.on_cell_intent(2, 1)
    controller.confirm()
    controller.dispose()
    assert controller.scheduler.pending == 0
    drive_ticks(bus, 5)
    snap = controller.snapshot()
    assert snap.animation.step == 0
    assert snap.character == (1, 1)
    controller.cancel()
    assert snap.path == controller.snapshot().path


def test_dispose_detaches_controller_from_bus(small_game):
    bus, _, controller = small_game
    assert receiver_counts(bus)[EVENT_TICK] == 1
    controller.dispose()
    assert all(count == 0 for count in receiver_counts(bus).values())
    bus.emit(EVENT_CELL_INTENT, x=2, y=1)
    assert controller.snapshot().path == ((1, 1),)


def test_custom_scheduler_and_delay():
    bus = EventBus()
    world = create_world(size=3, rng=random.Random(2))
    paint_board(world, G, empty=[(1, 1)])
    scheduler = TickScheduler()
    controller = GameController(world, bus, scheduler=scheduler, step_delay_ms=50)
    controller.on_cell_intent(1, 2)
    controller.on_cell_intent(0, 2)
    controller.confirm()
    drive_ticks(bus, 3)
    assert controller.snapshot().animating
    scheduler.advance(0.05)
    assert controller.snapshot().walker == (1, 2)
    scheduler.advance(0.05)
    assert controller.snapshot().character == (0, 2)


def test_dispose_leaves_external_scheduler_running():
    bus = EventBus()
    world = create_world(size=3, rng=random.Random(2))
    scheduler = TickScheduler(bus)
    controller = GameController(world, bus, scheduler=scheduler)
    controller.dispose()
    fired = []
    scheduler.schedule_after(10, lambda: fired.append(1))
    drive_ticks(bus, 1, dt=0.02)
    assert fired == [1]
    assert receiver_counts(bus)[EVENT_CELL_INTENT] == 0


def test_paths_follow_rules_over_many_turns():
    bus = EventBus()
    world = create_world(rng=random.Random(99))
    controller = GameController(world, bus)
    rng = random.Random(5)
    for _ in range(30):
        for _ in range(12):
            cx, cy = controller.snapshot().path[-1]
            controller.on_cell_intent(cx + rng.randint(-1, 1), cy + rng.randint(-1, 1))
            snap = controller.snapshot()
            assert len(set(snap.path)) == len(snap.path)
            assert all(snap.cell(x, y).color is snap.locked_color for x, y in snap.path[1:])
        controller.confirm()
        drive_ticks(bus, 20)
        snap = controller.snapshot()
        assert not snap.animating
        assert snap.cell(*snap.character).is_empty
        counts = column_dot_counts(world)
        assert counts[snap.character[0]] == 6
        assert sum(counts) == 48
