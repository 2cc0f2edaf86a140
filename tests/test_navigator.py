"""Tests for harvest_mission.core.navigator."""

from __future__ import annotations

import pytest

from harvest_mission.core.pose import Checkpoint, Heading


def test_route_is_x_then_z(make_context, field) -> None:
    ctx = make_context(field)
    ctx.navigator.move_to(2, 3)
    assert field.visits == [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (2, 3)]
    assert ctx.pose.heading is Heading.SOUTH


def test_no_turns_for_zero_delta(make_context, field) -> None:
    ctx = make_context(field)
    ctx.navigator.move_to(3, 0)
    assert field.turns == 0
    ctx.navigator.move_to(3, 0)
    assert field.steps == 3


@pytest.mark.parametrize(
    "start,target",
    [
        ((0, 0), (0, 0)),
        ((0, 0), (4, 1)),
        ((2, 3), (0, 0)),
        ((5, 0), (5, -2)),
        ((3, 4), (1, 6)),
        ((1, 1), (-2, 1)),
    ],
)
def test_move_to_lands_exactly(make_context, field, start, target) -> None:
    ctx = make_context(field)
    ctx.navigator.move_to(*start)
    ctx.navigator.move_to(*target)
    assert ctx.pose.cell == target
    assert (field.x, field.z) == target


def test_move_to_survives_transient_obstructions(make_context, field) -> None:
    field.add_obstruction(1, 0, failures=2)
    field.add_obstruction(2, 2, failures=1)
    ctx = make_context(field)
    ctx.navigator.move_to(2, 2)
    assert ctx.pose.cell == (2, 2) == (field.x, field.z)
    assert ctx.motion.obstructions == 3


def test_go_home_faces_into_work_area(make_context, field) -> None:
    ctx = make_context(field)
    ctx.navigator.move_to(3, 2)
    ctx.navigator.go_home()
    assert ctx.pose.cell == (0, 0)
    assert ctx.pose.heading is Heading.EAST
    assert ctx.navigator.at_home()


@pytest.mark.parametrize("heading", list(Heading))
def test_return_to_restores_checkpoint(make_context, field, heading) -> None:
    ctx = make_context(field)
    checkpoint = Checkpoint(2, 1, heading)
    ctx.navigator.return_to(checkpoint)
    assert ctx.pose.matches(checkpoint)
    assert (field.x, field.z, field.heading) == (2, 1, heading)
