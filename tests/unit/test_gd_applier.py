"""Unit tests for writing GD values back to view members."""

import pytest

from configurator.application.gd_applier import (
    ViewDimensionApplier,
    is_modal_child,
    overhang_flag,
)
from configurator.domain.catalog import DimensionEntry, ProductData
from configurator.domain.entities import Cabinet, Scene
from configurator.domain.errors import DrawerBoundError, InvalidDimensionError
from configurator.domain.relations import GroupRelationStore, SyncRelationStore
from configurator.domain.services import (
    DependentComponentAligner,
    DimensionValueResolver,
    WidthChangeCoordinator,
)
from configurator.domain.value_objects import (
    CabinetType,
    Dimensions,
    GDRole,
    ScenePosition,
    WallDimensions,
)
from configurator.domain.views import ViewManager
from configurator.infrastructure import CatalogProductDataProvider, InMemoryPanelStateStore

UNIT_DIMS = {
    "w": "gd-w",
    "h": "gd-h",
    "d": "gd-d",
    "shelves": "gd-shelf",
    "drawers": "gd-dq",
    "doors": "gd-door",
    "overhang": "gd-oh",
    "d1": "gd-d1",
    "label": "gd-label",
}


def _unit_product() -> ProductData:
    dims = {dim_id: DimensionEntry(dim_id, gd_id=gd_id) for dim_id, gd_id in UNIT_DIMS.items()}
    dims["hidden"] = DimensionEntry("hidden", gd_id="gd-hidden", visible=False)
    return ProductData(
        product_id="unit",
        dims=dims,
        gd_mapping={
            GDRole.WIDTH: ["gd-w", "gd-hidden"],
            GDRole.HEIGHT: ["gd-h"],
            GDRole.DEPTH: ["gd-d"],
            GDRole.SHELF_QTY: ["gd-shelf"],
            GDRole.DRAWER_QTY: ["gd-dq"],
            GDRole.DOOR_QTY: ["gd-door"],
            GDRole.DOOR_OVERHANG: ["gd-oh"],
            GDRole.DRAWER_HEIGHT_0: ["gd-d1"],
        },
    )


def _filler_product() -> ProductData:
    return ProductData(
        product_id="filler",
        dims={"h": DimensionEntry("h", gd_id="gd-h")},
        gd_mapping={GDRole.HEIGHT: ["gd-h"]},
    )


def _box(cabinet_id: str, x: float, y: float = 0.0, **kwargs) -> Cabinet:
    kwargs.setdefault("cabinet_type", CabinetType.BASE)
    return Cabinet(
        cabinet_id=cabinet_id,
        dimensions=Dimensions(600.0, 720.0, 560.0),
        position=ScenePosition(x, y),
        **kwargs,
    )


class Kit:
    """View A holds u1, u2, a double-locked unit and a filler hanging off t1."""

    def __init__(self) -> None:
        self.scene = Scene(WallDimensions(3600.0, 2400.0))
        for cabinet in (
            _box(
                "u1", 100, view_id="A", product_id="unit",
                drawer_enabled=True, drawer_quantity=3, drawer_heights=[200.0, 200.0, 320.0],
            ),
            _box(
                "u2", 700, view_id="A", product_id="unit",
                drawer_enabled=True, drawer_quantity=3, drawer_heights=[240.0, 240.0, 240.0],
            ),
            _box("lk", 1300, view_id="A", product_id="unit", left_lock=True, right_lock=True),
            _box("t1", 0, 1500.0, cabinet_type=CabinetType.TOP),
            _box("t2", 1000, 1500.0, cabinet_type=CabinetType.TOP),
            Cabinet(
                cabinet_id="f1",
                cabinet_type=CabinetType.FILLER,
                dimensions=Dimensions(50.0, 720.0, 20.0),
                position=ScenePosition(600.0, 1500.0),
                view_id="A",
                product_id="filler",
                parent_cabinet_id="t1",
                parent_side="right",
            ),
        ):
            self.scene.add(cabinet)

        self.products = {"unit": _unit_product(), "filler": _filler_product()}
        self.panel_state = InMemoryPanelStateStore({"t1": {"values": {}}})
        views = ViewManager(self.scene)
        dependents = DependentComponentAligner(self.scene)
        coordinator = WidthChangeCoordinator(
            self.scene,
            GroupRelationStore(),
            SyncRelationStore(),
            views,
            dependents=dependents,
        )
        values = DimensionValueResolver(
            self.scene,
            self.panel_state,
            CatalogProductDataProvider(self.products.values()),
        )
        self.applier = ViewDimensionApplier(
            self.scene, views, values, coordinator, dependents=dependents
        )

    def apply(self, gd_id: str, value: float) -> list[str]:
        return self.applier.apply_gd_value("A", gd_id, value, self.products)

    def __getitem__(self, cabinet_id: str) -> Cabinet:
        return self.scene.require(cabinet_id)


@pytest.fixture
def kit() -> Kit:
    return Kit()


class TestHelpers:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1.0, True), (0, False), (-1, False), ("Yes", True), ("true", True), ("no", False)],
    )
    def test_overhang_flag(self, value, expected: bool) -> None:
        assert overhang_flag(value) is expected

    def test_is_modal_child(self, kit: Kit) -> None:
        assert is_modal_child(kit["f1"])
        assert not is_modal_child(kit["u1"])
        assert not is_modal_child(
            Cabinet("loose", CabinetType.FILLER, Dimensions(50.0, 720.0, 20.0))
        )


class TestGeometryRoles:
    """Tests for width, height and depth GDs."""

    def test_width_goes_through_the_coordinator(self, kit: Kit) -> None:
        changed = kit.apply("gd-w", 650.0)

        assert (kit["u1"].x, kit["u1"].width) == (50.0, 650.0)
        assert (kit["u2"].x, kit["u2"].width) == (700.0, 650.0)
        assert kit["lk"].width == 600.0
        assert {"u1", "u2"} <= set(changed)
        assert kit.panel_state.get_values("u1") == {"w": 650.0}
        assert kit.panel_state.get("lk") is None

    def test_unchanged_width_touches_nothing(self, kit: Kit) -> None:
        assert kit.apply("gd-w", 600.0) == []
        assert kit["u1"].x == 100.0

    def test_height_rescales_drawers_and_skips_modal_children(self, kit: Kit) -> None:
        changed = kit.apply("gd-h", 900.0)

        assert kit["u1"].drawer_heights == [250.0, 250.0, 400.0]
        assert kit["u2"].drawer_heights == [300.0, 300.0, 300.0]
        assert kit["lk"].height == 900.0
        assert kit["f1"].height == 720.0
        assert changed == ["u1", "u2", "lk"]

    def test_depth(self, kit: Kit) -> None:
        changed = kit.apply("gd-d", 600.0)

        assert changed == ["u1", "u2", "lk"]
        assert kit["u2"].depth == 600.0
        assert kit["f1"].depth == 20.0

    @pytest.mark.parametrize("gd_id", ["gd-w", "gd-h", "gd-d"])
    def test_negative_size_is_rejected_before_any_write(self, kit: Kit, gd_id: str) -> None:
        with pytest.raises(InvalidDimensionError, match="of u1 cannot be negative"):
            kit.apply(gd_id, -400.0)

        assert kit["u1"].dimensions == Dimensions(600.0, 720.0, 560.0)
        assert kit.panel_state.get("u1") is None
        assert kit.panel_state.get("u2") is None

    def test_modal_child_keeps_its_stored_height(self, kit: Kit) -> None:
        kit.apply("gd-h", 900.0)

        assert kit.panel_state.get("f1") is None
        assert kit.panel_state.get_values("u1") == {"h": 900.0}

    def test_hidden_dimensions_are_not_targets(self, kit: Kit) -> None:
        assert kit.apply("gd-hidden", 900.0) == []
        assert kit["u1"].width == 600.0


class TestDrawerRoles:
    def test_drawer_height_on_every_member(self, kit: Kit) -> None:
        changed = kit.apply("gd-d1", 400.0)

        assert kit["u1"].drawer_heights == [400.0, 160.0, 160.0]
        assert kit["u2"].drawer_heights == [400.0, 160.0, 160.0]
        assert changed == ["u1", "u2"]

    def test_rejected_drawer_height_changes_nothing(self, kit: Kit) -> None:
        with pytest.raises(DrawerBoundError):
            kit.apply("gd-d1", 450.0)

        assert kit["u1"].drawer_heights == [200.0, 200.0, 320.0]
        assert kit.panel_state.get("u1") is None

    def test_drawer_quantity_resets_heights(self, kit: Kit) -> None:
        kit.apply("gd-dq", 4.0)

        assert kit["u1"].drawer_heights == [180.0, 180.0, 180.0, 180.0]
        assert kit["lk"].drawer_quantity == 4


class TestConfigurationRoles:
    def test_counts_are_rounded(self, kit: Kit) -> None:
        kit.apply("gd-shelf", 3.4)
        kit.apply("gd-door", 2.0)

        assert kit["u1"].shelf_count == 3
        assert kit["lk"].door_quantity == 2

    def test_door_overhang_applies_to_wall_cabinets(self, kit: Kit) -> None:
        changed = kit.apply("gd-oh", 1.0)

        assert changed == ["t1", "t2"]
        assert kit["t1"].overhang_door and kit["t2"].overhang_door
        assert kit.panel_state.get_values("t1") == {"overhang": 1.0}
        assert kit.panel_state.get("t2") is None
        assert kit["f1"].height == 740.0
        assert kit["f1"].y == 1480.0

    def test_unmapped_gd_only_updates_stored_values(self, kit: Kit) -> None:
        changed = kit.apply("gd-label", 3.0)

        assert changed == ["u1", "u2", "lk"]
        assert kit.panel_state.get_values("lk") == {"label": 3.0}
        assert kit["u1"].x == 100.0

        assert kit.apply("gd-label", 3.0) == []
