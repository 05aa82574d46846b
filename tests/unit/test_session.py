"""Unit tests for ConfiguratorSession."""

from typing import Any

import pytest

from configurator.application.config import SceneConfiguration, load_config_from_dict
from configurator.application.session import ConfiguratorSession, config_to_scene
from configurator.domain.errors import DrawerBoundError, UnknownCabinetError
from configurator.domain.events import DrawerEditRejected
from configurator.domain.value_objects import CabinetType


def _cabinet(cabinet_id: str, x: float = 0.0, **extra: Any) -> dict[str, Any]:
    cabinet = {
        "id": cabinet_id,
        "type": "base",
        "dimensions": {"width": 600, "height": 720, "depth": 560},
        "position": {"x": x},
    }
    cabinet.update(extra)
    return cabinet


def _load(*cabinets: dict[str, Any], **sections: Any) -> ConfiguratorSession:
    data: dict[str, Any] = {
        "schema_version": "1.0",
        "wall": {"length": 3600, "height": 2400},
        "cabinets": list(cabinets),
    }
    data.update(sections)
    return ConfiguratorSession.from_config(load_config_from_dict(data))


class TestFromConfig:
    """Tests for loading a configuration into a session."""

    def test_scene_and_relations(self, kitchen_config: SceneConfiguration) -> None:
        scene = config_to_scene(kitchen_config)

        assert [c.cabinet_id for c in scene] == ["c1", "c2", "c3", "c4"]
        assert scene.require("c4").cabinet_type is CabinetType.TALL
        assert scene.require("c4").locks_both

    def test_formulas_are_registered_without_scheduling(
        self, kitchen_session: ConfiguratorSession
    ) -> None:
        assert kitchen_session.engine.get_formula("B", "gd-width") == (
            "viewGd('A', 'gd-width') + 50"
        )
        assert kitchen_session.scheduler.pending == 0
        assert kitchen_session.scene.require("c3").width == 450.0

    def test_groups_and_syncs(self) -> None:
        session = _load(
            _cabinet("a"),
            _cabinet("b", 600),
            groups={"a": [{"cabinet_id": "b", "percentage": 100}]},
            syncs={"a": ["b", "a"]},
        )

        assert session.groups.member_ids("a") == ["b"]
        assert session.syncs.synced_with("a") == {"b"}

    def test_drawers_not_filling_cabinet_are_rebalanced(self) -> None:
        session = _load(_cabinet("a", drawers={"quantity": 2, "heights": [100, 100]}))

        assert session.scene.require("a").drawer_heights == [360.0, 360.0]

    def test_material_color_survives_round_trip(self) -> None:
        session = _load(
            _cabinet("a"),
            panel_state={"a": {"values": {"w": 600}, "material_color": "oak"}},
        )

        config = session.to_config()

        assert config.panel_state["a"].material_color == "oak"
        assert config.panel_state["a"].values == {"w": 600}


class TestToConfig:
    def test_snapshot_of_kitchen(self, kitchen_session: ConfiguratorSession) -> None:
        config = kitchen_session.to_config()

        assert [c.id for c in config.cabinets] == ["c1", "c2", "c3", "c4"]
        assert config.views == ["A", "B"]
        assert config.formulas == {"B": {"gd-width": "viewGd('A', 'gd-width') + 50"}}
        assert sorted(config.products) == ["base", "drawer-base"]
        assert config.cabinets[2].drawers.heights == [240, 240, 240]

    def test_stale_selection_is_dropped(self) -> None:
        session = _load(_cabinet("a"), selection=["a"])
        session.selection.append("gone")

        assert session.to_config().selection == ["a"]


class TestEdits:
    """Tests for the user operations a session exposes."""

    def test_resize_schedules_formulas(self, kitchen_session: ConfiguratorSession) -> None:
        kitchen_session.resize("c1", 700.0)

        assert kitchen_session.scene.require("c1").x == 0.0
        assert kitchen_session.scene.require("c2").x == 650.0
        assert kitchen_session.scheduler.pending == 2

        assert kitchen_session.flush() == 2

        c3 = kitchen_session.scene.require("c3")
        assert (c3.x, c3.width) == (1100.0, 650.0)

    def test_recalculate(self, kitchen_session: ConfiguratorSession) -> None:
        report = kitchen_session.recalculate()

        assert report.passes == 2
        assert report.applied == ["B:gd-width"]
        assert kitchen_session.scene.require("c3").width == 650.0
        assert kitchen_session.panel_state.get_values("c3") == {"width": 650.0}
        assert kitchen_session.scheduler.pending == 0

    def test_edit_drawer(self, kitchen_session: ConfiguratorSession) -> None:
        heights = kitchen_session.edit_drawer("c3", 0, 400.0)

        assert heights == [400.0, 160.0, 160.0]

    def test_rejected_drawer_edit_publishes_event(
        self, kitchen_session: ConfiguratorSession
    ) -> None:
        rejected: list[DrawerEditRejected] = []
        kitchen_session.events.subscribe(DrawerEditRejected, rejected.append)

        with pytest.raises(DrawerBoundError):
            kitchen_session.edit_drawer("c3", 0, 600.0)

        assert kitchen_session.scene.require("c3").drawer_heights == [240.0, 240.0, 240.0]
        assert rejected[0].cabinet_id == "c3"
        assert "min 50mm" in rejected[0].reason

    def test_drawer_quantity(self, kitchen_session: ConfiguratorSession) -> None:
        assert kitchen_session.set_drawer_quantity("c3", 4) == [180.0, 180.0, 180.0, 180.0]

    def test_select_unknown_cabinet(self, kitchen_session: ConfiguratorSession) -> None:
        with pytest.raises(UnknownCabinetError):
            kitchen_session.select(["c1", "ghost"])

        assert kitchen_session.selection == []

    def test_move(self, kitchen_session: ConfiguratorSession) -> None:
        moved = kitchen_session.move("c1", 100.0)

        assert moved == ["c1", "c2"]
        assert kitchen_session.scene.require("c2").x == 700.0


class TestDeletes:
    def test_delete_cabinet_cascades(self) -> None:
        session = _load(
            _cabinet("p", 100, view="A"),
            _cabinet("q", 700, view="A"),
            {
                "id": "k",
                "type": "kicker",
                "dimensions": {"width": 600, "height": 100, "depth": 16},
                "parent_id": "p",
            },
            views=["A"],
            groups={"q": [{"cabinet_id": "p", "percentage": 100}]},
            syncs={"q": ["p"]},
            selection=["p", "q"],
            panel_state={"p": {"values": {"w": 600}}},
        )

        removed = session.delete_cabinet("p")

        assert removed == ["p", "k"]
        assert [c.cabinet_id for c in session.scene] == ["q"]
        assert session.groups.member_ids("q") == []
        assert session.syncs.synced_with("q") == set()
        assert session.panel_state.get("p") is None
        assert session.selection == ["q"]
        assert session.views.get_cabinets_in_view("A") == ["q"]

    def test_delete_view_drops_formulas(self, kitchen_session: ConfiguratorSession) -> None:
        members = kitchen_session.delete_view("B")

        assert members == ["c3"]
        assert kitchen_session.scene.require("c3").view_id == "none"
        assert kitchen_session.engine.all_formulas() == {}
        assert kitchen_session.views.view_ids == ["A"]
