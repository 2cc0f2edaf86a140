"""Tests for harvest_mission.core.harvest."""

from __future__ import annotations

import pytest

from harvest_mission.core.harvest import HarvestClassifier
from harvest_mission.sim import MELON, MELON_STEM, SimulatedField


class TestHarvestClassifier:
    @pytest.mark.parametrize(
        "identity,expected",
        [
            ("minecraft:melon", True),
            ("minecraft:melon_block", True),
            ("somemod:giant_melon", True),
            ("minecraft:melon_stem", False),
            ("minecraft:attached_melon_stem", False),
            ("minecraft:pumpkin", False),
            ("", False),
            (None, False),
        ],
    )
    def test_default_rules(self, identity, expected) -> None:
        assert HarvestClassifier().is_harvestable(identity) is expected

    def test_allow_list_beats_exclude(self) -> None:
        classifier = HarvestClassifier(allow_list=frozenset({"mod:stemmed_melon"}))
        assert classifier.is_harvestable("mod:stemmed_melon")

    def test_without_keyword_only_allow_list_counts(self) -> None:
        classifier = HarvestClassifier(allow_list=frozenset({"minecraft:pumpkin"}), keyword=None)
        assert classifier.is_harvestable("minecraft:pumpkin")
        assert not classifier.is_harvestable("minecraft:melon")


class TestHarvestCell:
    def test_breaks_mature_crop(self, make_context) -> None:
        field = SimulatedField({(0, 0): MELON})
        ctx = make_context(field)
        assert ctx.cell_action.harvest_cell()
        assert (0, 0) not in field.crops
        assert field.inventory_items(MELON) == 1
        assert ctx.cell_action.unconfirmed == 0

    def test_leaves_stem_in_place(self, make_context) -> None:
        field = SimulatedField({(0, 0): MELON_STEM})
        ctx = make_context(field)
        assert not ctx.cell_action.harvest_cell()
        assert field.crops[(0, 0)] == MELON_STEM

    def test_empty_cell_is_noop(self, make_context, field) -> None:
        ctx = make_context(field)
        assert not ctx.cell_action.harvest_cell()
        assert field.inspections == 1

    def test_full_inventory_marks_harvest_unconfirmed(self, make_context) -> None:
        field = SimulatedField({(0, 0): MELON})
        field.fill_slots()
        ctx = make_context(field)
        assert ctx.cell_action.harvest_cell()
        assert ctx.cell_action.harvested == 1
        assert ctx.cell_action.unconfirmed == 1
        assert field.lost_items == 1
