"""Unit tests for the cab/dim/viewGd formula scope."""

import pytest

from configurator.domain.catalog import DimensionEntry, ProductData
from configurator.domain.entities import ApplianceGaps, Cabinet, Scene
from configurator.domain.formula import FormulaInterpreter, FormulaScope
from configurator.domain.services import DimensionValueResolver
from configurator.domain.value_objects import (
    CabinetType,
    Dimensions,
    ScenePosition,
    WallDimensions,
)
from configurator.domain.views import ViewManager
from configurator.infrastructure import CatalogProductDataProvider, InMemoryPanelStateStore


@pytest.fixture
def scope() -> FormulaScope:
    """View A holds an unmapped cabinet, a hidden mapping and then a visible one."""
    scene = Scene(WallDimensions(3600.0, 2400.0))
    scene.add(
        Cabinet(
            cabinet_id="plain",
            cabinet_type=CabinetType.BASE,
            dimensions=Dimensions(600.0, 720.0, 560.0),
            view_id="A",
        )
    )
    scene.add(
        Cabinet(
            cabinet_id="hidden",
            cabinet_type=CabinetType.BASE,
            dimensions=Dimensions(600.0, 720.0, 560.0),
            position=ScenePosition(600.0, 0.0),
            view_id="A",
            product_id="secret",
        )
    )
    scene.add(
        Cabinet(
            cabinet_id="c1",
            cabinet_type=CabinetType.BASE,
            dimensions=Dimensions(500.0, 720.0, 560.0),
            position=ScenePosition(1200.0, 0.0, 10.0),
            view_id="A",
            product_id="base",
        )
    )
    scene.add(
        Cabinet(
            cabinet_id="f",
            cabinet_type=CabinetType.FILLER,
            dimensions=Dimensions(50.0, 720.0, 20.0),
            position=ScenePosition(1700.0, 0.0),
            parent_cabinet_id="c1",
            parent_side="right",
        )
    )
    scene.add(
        Cabinet(
            cabinet_id="oven",
            cabinet_type=CabinetType.APPLIANCE,
            dimensions=Dimensions(600.0, 900.0, 580.0),
            position=ScenePosition(2000.0, 0.0),
            appliance_gaps=ApplianceGaps(top=10.0, left=5.0, right=5.0, kicker_height=90.0),
        )
    )
    products = CatalogProductDataProvider(
        [
            ProductData(
                "secret",
                dims={"w": DimensionEntry("w", gd_id="gd-w", default_value=111.0, visible=False)},
            ),
            ProductData(
                "base",
                dims={"w": DimensionEntry("w", gd_id="gd-w", default_value=600.0)},
            ),
        ]
    )
    panel_state = InMemoryPanelStateStore({"c1": {"values": {"w": 500}}})
    values = DimensionValueResolver(scene, panel_state, products)
    return FormulaScope(scene, ViewManager(scene), values, products)


class TestCabinetField:
    def test_geometry_fields(self, scope: FormulaScope) -> None:
        assert scope.cabinet_field("c1", "x") == 1200.0
        assert scope.cabinet_field("c1", "z") == 10.0
        assert scope.cabinet_field("c1", "width") == 500.0
        assert scope.cabinet_field("c1", "top") == 720.0
        assert scope.cabinet_field("c1", "left") == 1200.0

    def test_right_includes_attached_filler(self, scope: FormulaScope) -> None:
        assert scope.cabinet_field("c1", "right") == 1750.0

    def test_appliance_fields(self, scope: FormulaScope) -> None:
        assert scope.cabinet_field("oven", "visualWidth") == 590.0
        assert scope.cabinet_field("oven", "visualHeight") == 800.0
        assert scope.cabinet_field("oven", "kickerHeight") == 90.0
        assert scope.cabinet_field("oven", "shellWidth") == 600.0

    def test_unknown_field_or_cabinet(self, scope: FormulaScope) -> None:
        assert scope.cabinet_field("c1", "visualWidth") is None
        assert scope.cabinet_field("c1", "colour") is None
        assert scope.cabinet_field("ghost", "width") is None


class TestViewGdValue:
    def test_first_visible_mapped_member_wins(self, scope: FormulaScope) -> None:
        assert scope.view_gd_value("A", "gd-w") == 500.0

    def test_unmapped_gd_and_empty_views(self, scope: FormulaScope) -> None:
        assert scope.view_gd_value("A", "gd-missing") is None
        assert scope.view_gd_value("none", "gd-w") is None
        assert scope.view_gd_value("B", "gd-w") is None


class TestHostFunctions:
    """Tests for the functions formulas actually call."""

    def test_formula_reads_scene(self, scope: FormulaScope) -> None:
        interpreter = FormulaInterpreter()

        result = interpreter.evaluate(
            "cab('c1', 'width') + dim('c1', 'w') + viewGd('A', 'gd-w')",
            scope.host_functions(),
        )

        assert result == 1500.0

    def test_missing_data_reads_as_zero(self, scope: FormulaScope) -> None:
        host = scope.host_functions()

        assert host["cab"]("ghost", "width") == 0.0
        assert host["dim"]("c1", "missing") == 0.0
        assert host["viewGd"]("B", "gd-w") == 0.0
