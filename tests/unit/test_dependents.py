"""Unit tests for realigning dependent components."""

import pytest

from configurator.domain.entities import BenchtopExtras, Cabinet, Scene
from configurator.domain.services.dependents import DependentComponentAligner
from configurator.domain.value_objects import (
    CabinetType,
    Dimensions,
    ScenePosition,
    WallDimensions,
)


def _child(
    cabinet_id: str,
    cabinet_type: CabinetType,
    parent_id: str,
    side: str | None = None,
    dimensions: Dimensions | None = None,
    **kwargs,
) -> Cabinet:
    return Cabinet(
        cabinet_id=cabinet_id,
        cabinet_type=cabinet_type,
        dimensions=dimensions or Dimensions(50.0, 100.0, 20.0),
        parent_cabinet_id=parent_id,
        parent_side=side,
        **kwargs,
    )


@pytest.fixture
def scene() -> Scene:
    return Scene(WallDimensions(3600.0, 2400.0))


class TestSideChildren:
    """Tests for fillers and panels hanging off a parent."""

    def test_left_filler_follows_parent(self, scene: Scene) -> None:
        scene.add(
            Cabinet(
                cabinet_id="p",
                cabinet_type=CabinetType.BASE,
                dimensions=Dimensions(600.0, 720.0, 560.0),
                position=ScenePosition(500.0, 0.0),
            )
        )
        filler = scene.add(_child("f", CabinetType.FILLER, "p", "left"))

        updated = DependentComponentAligner(scene).update_dependents("p")

        assert updated == ["f"]
        assert filler.x == 450.0
        assert filler.height == 720.0
        assert filler.depth == 20.0

    def test_panel_under_overhanging_top(self, scene: Scene) -> None:
        scene.add(
            Cabinet(
                cabinet_id="t",
                cabinet_type=CabinetType.TOP,
                dimensions=Dimensions(600.0, 700.0, 350.0),
                position=ScenePosition(1000.0, 1500.0),
                overhang_door=True,
            )
        )
        panel = scene.add(_child("p", CabinetType.PANEL, "t", "right"))

        DependentComponentAligner(scene).update_dependents("t")

        assert panel.x == 1600.0
        assert panel.y == 1480.0
        assert panel.height == 720.0
        assert panel.depth == 350.0


class TestFaceComponents:
    """Tests for kickers, bulkheads, under-panels and benchtops."""

    def test_kicker_spans_off_floor_fillers(self, scene: Scene) -> None:
        scene.add(
            Cabinet(
                cabinet_id="tall",
                cabinet_type=CabinetType.TALL,
                dimensions=Dimensions(600.0, 2000.0, 580.0),
                position=ScenePosition(500.0, 150.0),
            )
        )
        scene.add(_child("f", CabinetType.FILLER, "tall", "left"))
        kicker = scene.add(_child("k", CabinetType.KICKER, "tall"))

        updated = DependentComponentAligner(scene).update_dependents("tall")

        assert updated == ["f", "k"]
        assert kicker.width == 650.0
        assert kicker.height == 150.0
        assert kicker.depth == 16.0
        assert kicker.x == 775.0
        assert kicker.left == 450.0
        assert kicker.y == 0.0

    def test_bulkhead_fills_to_wall_height(self, scene: Scene) -> None:
        scene.add(
            Cabinet(
                cabinet_id="t",
                cabinet_type=CabinetType.TOP,
                dimensions=Dimensions(600.0, 700.0, 350.0),
                position=ScenePosition(1000.0, 1500.0),
            )
        )
        bulkhead = scene.add(_child("b", CabinetType.BULKHEAD, "t"))

        DependentComponentAligner(scene).update_dependents("t")

        assert bulkhead.height == 200.0
        assert bulkhead.y == 2200.0
        assert bulkhead.x == 1300.0
        assert bulkhead.width == 600.0

    def test_under_panel(self, scene: Scene) -> None:
        scene.add(
            Cabinet(
                cabinet_id="t",
                cabinet_type=CabinetType.TOP,
                dimensions=Dimensions(600.0, 700.0, 350.0),
                position=ScenePosition(1000.0, 1500.0),
            )
        )
        panel = scene.add(_child("u", CabinetType.UNDER_PANEL, "t"))

        DependentComponentAligner(scene).update_dependents("t")

        assert panel.depth == 330.0
        assert panel.height == 16.0
        assert panel.x == 1000.0
        assert panel.y == 1500.0

    def test_benchtop_with_overhangs(self, scene: Scene) -> None:
        scene.add(
            Cabinet(
                cabinet_id="base",
                cabinet_type=CabinetType.BASE,
                dimensions=Dimensions(600.0, 720.0, 560.0),
                position=ScenePosition(100.0, 0.0),
            )
        )
        benchtop = scene.add(
            _child(
                "bt",
                CabinetType.BENCHTOP,
                "base",
                benchtop=BenchtopExtras(left_overhang=10.0, right_overhang=5.0),
            )
        )

        DependentComponentAligner(scene).update_dependents("base")

        assert benchtop.width == 615.0
        assert benchtop.height == 38.0
        assert benchtop.depth == 600.0
        assert benchtop.x == 90.0
        assert benchtop.y == 720.0

    def test_mismatched_parent_type_is_ignored(self, scene: Scene) -> None:
        scene.add(
            Cabinet(
                cabinet_id="t",
                cabinet_type=CabinetType.TOP,
                dimensions=Dimensions(600.0, 700.0, 350.0),
                position=ScenePosition(1000.0, 1500.0),
            )
        )
        benchtop = scene.add(_child("bt", CabinetType.BENCHTOP, "t"))

        assert DependentComponentAligner(scene).update_dependents("t") == []
        assert benchtop.width == 50.0

    def test_unknown_parent(self, scene: Scene) -> None:
        assert DependentComponentAligner(scene).update_dependents("ghost") == []
