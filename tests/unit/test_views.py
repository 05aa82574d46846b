"""Unit tests for ViewManager."""

import pytest

from configurator.domain.entities import NO_VIEW, Cabinet, Scene
from configurator.domain.errors import ViewError
from configurator.domain.value_objects import (
    CabinetType,
    Dimensions,
    ScenePosition,
    WallDimensions,
)
from configurator.domain.views import MAX_VIEWS, ViewManager


@pytest.fixture
def scene() -> Scene:
    scene = Scene(WallDimensions(3600.0, 2400.0))
    for i, cabinet_id in enumerate(["c1", "c2", "c3"]):
        scene.add(
            Cabinet(
                cabinet_id=cabinet_id,
                cabinet_type=CabinetType.BASE,
                dimensions=Dimensions(600.0, 720.0, 560.0),
                position=ScenePosition(i * 600.0, 0.0),
            )
        )
    return scene


class TestViewManager:
    """Tests for view creation, membership and deletion."""

    def test_create_view_uses_next_free_letter(self, scene: Scene) -> None:
        manager = ViewManager(scene)

        assert manager.create_view() == "A"
        assert manager.create_view() == "B"
        assert manager.view_ids == ["A", "B"]

    def test_create_view_fills_gaps(self, scene: Scene) -> None:
        manager = ViewManager(scene, ["A", "C"])

        assert manager.create_view() == "B"

    def test_view_limit(self, scene: Scene) -> None:
        manager = ViewManager(scene)
        for _ in range(MAX_VIEWS):
            manager.create_view()

        with pytest.raises(ViewError, match="Maximum number of views"):
            manager.create_view()

    def test_membership_follows_scene_order(self, scene: Scene) -> None:
        manager = ViewManager(scene, ["A"])

        manager.assign_cabinet_to_view("c3", "A")
        manager.assign_cabinet_to_view("c1", "A")

        assert manager.get_cabinets_in_view("A") == ["c1", "c3"]
        assert manager.are_cabinets_in_same_view("c1", "c3")
        assert not manager.are_cabinets_in_same_view("c1", "c2")

    def test_assign_none_unassigns(self, scene: Scene) -> None:
        manager = ViewManager(scene, ["A"])
        manager.assign_cabinet_to_view("c1", "A")

        manager.assign_cabinet_to_view("c1", NO_VIEW)

        assert manager.get_cabinets_in_view("A") == []
        assert manager.get_cabinet_view("c1") is None

    def test_assign_to_unknown_view(self, scene: Scene) -> None:
        with pytest.raises(ViewError):
            ViewManager(scene).assign_cabinet_to_view("c1", "Q")

    def test_none_view_has_no_members(self, scene: Scene) -> None:
        manager = ViewManager(scene)

        assert manager.get_cabinets_in_view(NO_VIEW) == []

    def test_delete_view_unassigns_members(self, scene: Scene) -> None:
        manager = ViewManager(scene, ["A", "B"])
        manager.assign_cabinet_to_view("c1", "A")
        manager.assign_cabinet_to_view("c2", "A")

        removed = manager.delete_view("A")

        assert removed == ["c1", "c2"]
        assert manager.view_ids == ["B"]
        assert scene.require("c1").view_id == NO_VIEW

    def test_cannot_delete_none_view(self, scene: Scene) -> None:
        with pytest.raises(ViewError):
            ViewManager(scene).delete_view(NO_VIEW)

    def test_cannot_delete_unknown_view(self, scene: Scene) -> None:
        with pytest.raises(ViewError):
            ViewManager(scene).delete_view("Z")

    def test_views_are_picked_up_from_cabinets(self, scene: Scene) -> None:
        scene.require("c2").view_id = "D"

        manager = ViewManager(scene)

        assert manager.view_ids == ["D"]
        assert manager.get_cabinets_in_view("D") == ["c2"]

    @pytest.mark.parametrize("view_id", ["a", "AB", "1", ""])
    def test_invalid_view_ids(self, scene: Scene, view_id: str) -> None:
        with pytest.raises(ViewError):
            ViewManager(scene).add_view(view_id)

    def test_duplicate_view(self, scene: Scene) -> None:
        manager = ViewManager(scene, ["A"])

        with pytest.raises(ViewError):
            manager.add_view("A")
