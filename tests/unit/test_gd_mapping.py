"""Unit tests for GD role mapping."""

import pytest

from configurator.domain.catalog import ProductData
from configurator.domain.services.gd_mapping import GDMapping, GDMappingRegistry
from configurator.domain.value_objects import GDRole
from configurator.infrastructure.stores import CatalogProductDataProvider


@pytest.fixture
def product() -> ProductData:
    return ProductData(
        product_id="drawer-base",
        gd_mapping={
            GDRole.WIDTH: ["gd-width"],
            GDRole.HEIGHT: ["gd-height", "gd-carcass-height"],
            GDRole.DRAWER_QTY: ["gd-dq"],
            GDRole.drawer_height(1): ["gd-d2"],
            GDRole.DEPTH: [],
        },
    )


class TestGDRole:
    def test_drawer_height_roles(self) -> None:
        assert GDRole.drawer_height(0) is GDRole.DRAWER_HEIGHT_0
        assert GDRole.drawer_height(4).value == "drawerH5"
        assert GDRole.DRAWER_HEIGHT_2.drawer_index == 2
        assert GDRole.WIDTH.drawer_index is None

    @pytest.mark.parametrize("index", [-1, 5])
    def test_drawer_height_out_of_range(self, index: int) -> None:
        with pytest.raises(ValueError):
            GDRole.drawer_height(index)


class TestGDMapping:
    """Tests for role lookups on one product."""

    def test_role_of(self, product: ProductData) -> None:
        mapping = GDMapping.from_product(product)

        assert mapping.role_of("gd-width") is GDRole.WIDTH
        assert mapping.role_of("gd-carcass-height") is GDRole.HEIGHT
        assert mapping.role_of("gd-unknown") is None
        assert mapping.role_of(None) is None

    def test_predicates(self, product: ProductData) -> None:
        mapping = GDMapping.from_product(product)

        assert mapping.is_width_gd("gd-width")
        assert mapping.is_height_gd("gd-height")
        assert mapping.is_drawer_qty_gd("gd-dq")
        assert not mapping.is_depth_gd("gd-width")
        assert not mapping.is_shelf_qty_gd("gd-dq")

    def test_empty_role_lists_are_dropped(self, product: ProductData) -> None:
        mapping = GDMapping.from_product(product)

        assert GDRole.DEPTH not in mapping.roles
        assert mapping.gd_ids(GDRole.DEPTH) == ()

    def test_drawer_height_index(self, product: ProductData) -> None:
        mapping = GDMapping.from_product(product)

        assert mapping.drawer_height_index("gd-d2") == 1
        assert mapping.drawer_height_index("gd-width") is None

    def test_badges(self, product: ProductData) -> None:
        mapping = GDMapping.from_product(product)

        assert mapping.badge("gd-width") == "Width"
        assert mapping.badge("gd-dq") == "Drawer Qty"
        assert mapping.badge("gd-d2") == "Drawer H2"
        assert mapping.badge("gd-unknown") is None

    def test_missing_product(self) -> None:
        mapping = GDMapping.from_product(None)

        assert mapping.roles == {}
        assert mapping.role_of("gd-width") is None


class TestGDMappingRegistry:
    def test_mappings_are_cached_until_invalidated(self, product: ProductData) -> None:
        provider = CatalogProductDataProvider([product])
        registry = GDMappingRegistry(provider)

        first = registry.for_product("drawer-base")
        assert registry.for_product("drawer-base") is first

        provider.add(ProductData("drawer-base", gd_mapping={GDRole.DEPTH: ["gd-width"]}))
        assert registry.for_product("drawer-base").is_width_gd("gd-width")

        registry.invalidate("drawer-base")
        assert registry.for_product("drawer-base").is_depth_gd("gd-width")

    def test_unknown_and_missing_products(self, product: ProductData) -> None:
        registry = GDMappingRegistry(CatalogProductDataProvider([product]))

        assert registry.for_product(None).roles == {}
        assert registry.for_product("ghost").roles == {}
