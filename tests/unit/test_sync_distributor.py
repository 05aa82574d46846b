"""Unit tests for synchronized cohort resize."""

import pytest

from configurator.domain.entities import Cabinet, Scene
from configurator.domain.errors import InvalidDimensionError
from configurator.domain.relations import SyncRelationStore
from configurator.domain.services.sync_distributor import SyncDistributor
from configurator.domain.value_objects import (
    CabinetType,
    Dimensions,
    ScenePosition,
    WallDimensions,
)


@pytest.fixture
def row() -> tuple[Scene, SyncRelationStore]:
    """Three synced 600mm cabinets spanning x 0..1800."""
    scene = Scene(WallDimensions(3600.0, 2400.0))
    for i, cabinet_id in enumerate(["a", "b", "c"]):
        scene.add(
            Cabinet(
                cabinet_id=cabinet_id,
                cabinet_type=CabinetType.BASE,
                dimensions=Dimensions(600.0, 720.0, 560.0),
                position=ScenePosition(i * 600.0, 0.0),
            )
        )
    syncs = SyncRelationStore()
    syncs.link_all(["a", "b", "c"])
    return scene, syncs


def _edges(scene: Scene) -> dict[str, tuple[float, float]]:
    return {c.cabinet_id: (c.left, c.right) for c in scene}


class TestSyncDistributor:
    """Tests for SyncDistributor."""

    def test_middle_member_grows_rightmost_absorbs(
        self, row: tuple[Scene, SyncRelationStore]
    ) -> None:
        """Growing the middle cabinet by 100 shrinks the rightmost to 500."""
        scene, syncs = row

        result = SyncDistributor(scene, syncs).distribute("b", 700.0, ["a", "b", "c"])

        assert result is not None
        assert _edges(scene) == {
            "a": (0.0, 600.0),
            "b": (600.0, 1300.0),
            "c": (1300.0, 1800.0),
        }
        assert scene.require("c").width == 500.0
        assert result.old_span == (0.0, 1800.0)
        assert result.new_span == (0.0, 1800.0)
        assert result.adjusted[0] == "b"

    def test_rightmost_member_grows_left_members_absorb(
        self, row: tuple[Scene, SyncRelationStore]
    ) -> None:
        scene, syncs = row

        SyncDistributor(scene, syncs).distribute("c", 700.0, ["a", "b", "c"])

        assert _edges(scene) == {
            "a": (0.0, 550.0),
            "b": (550.0, 1100.0),
            "c": (1100.0, 1800.0),
        }

    def test_widths_change_by_minus_delta_in_total(
        self, row: tuple[Scene, SyncRelationStore]
    ) -> None:
        scene, syncs = row
        before = sum(c.width for c in scene)

        SyncDistributor(scene, syncs).distribute("a", 800.0, ["a", "b", "c"])

        assert sum(c.width for c in scene) == pytest.approx(before)
        assert scene.require("b").width == pytest.approx(500.0)
        assert scene.require("c").width == pytest.approx(500.0)
        assert scene.require("b").left == pytest.approx(800.0)
        assert scene.require("c").right == pytest.approx(1800.0)

    def test_only_selected_members_take_part(
        self, row: tuple[Scene, SyncRelationStore]
    ) -> None:
        scene, syncs = row

        result = SyncDistributor(scene, syncs).distribute("a", 700.0, ["a", "b"])

        assert result is not None
        assert _edges(scene) == {
            "a": (0.0, 700.0),
            "b": (700.0, 1200.0),
            "c": (1200.0, 1800.0),
        }
        assert result.new_span == (0.0, 1200.0)

    def test_single_selected_member_is_not_a_cohort(
        self, row: tuple[Scene, SyncRelationStore]
    ) -> None:
        scene, syncs = row

        assert SyncDistributor(scene, syncs).distribute("b", 700.0, ["b"]) is None
        assert scene.require("b").width == 600.0

    def test_unsynced_selection_is_ignored(
        self, row: tuple[Scene, SyncRelationStore]
    ) -> None:
        scene, _ = row

        result = SyncDistributor(scene, SyncRelationStore()).distribute(
            "b", 700.0, ["a", "b", "c"]
        )

        assert result is None

    def test_unchanged_width(self, row: tuple[Scene, SyncRelationStore]) -> None:
        scene, syncs = row

        result = SyncDistributor(scene, syncs).distribute("b", 600.0, ["a", "b"])

        assert result is not None
        assert result.adjusted == []
        assert result.new_span == result.old_span

    def test_active_cohort_is_sorted_by_left_edge(
        self, row: tuple[Scene, SyncRelationStore]
    ) -> None:
        scene, syncs = row

        active = SyncDistributor(scene, syncs).active_cohort("c", ["b", "a"])

        assert [c.cabinet_id for c in active] == ["a", "b", "c"]

    @pytest.mark.parametrize(
        ("cabinet_id", "new_width", "collapsed"),
        [("b", 1400.0, "c"), ("c", 1900.0, "a")],
    )
    def test_growth_beyond_absorbing_widths_is_rejected(
        self,
        row: tuple[Scene, SyncRelationStore],
        cabinet_id: str,
        new_width: float,
        collapsed: str,
    ) -> None:
        scene, syncs = row
        before = _edges(scene)

        with pytest.raises(InvalidDimensionError, match=f"Width of {collapsed}"):
            SyncDistributor(scene, syncs).distribute(cabinet_id, new_width, ["a", "b", "c"])

        assert _edges(scene) == before

    def test_absorbing_member_may_shrink_to_zero(
        self, row: tuple[Scene, SyncRelationStore]
    ) -> None:
        scene, syncs = row

        result = SyncDistributor(scene, syncs).distribute("b", 1200.0, ["a", "b", "c"])

        assert result is not None
        assert _edges(scene)["c"] == (1800.0, 1800.0)
        assert result.new_span == (0.0, 1800.0)
