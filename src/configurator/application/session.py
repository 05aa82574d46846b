"""A configured scene with every engine service wired together.

ConfiguratorSession is what the CLI, the API and the integration tests work
with: it loads a SceneConfiguration into domain objects, exposes the user
operations (resize, move, drawer edits, formula edits, deletes) and writes
the result back out as a SceneConfiguration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from configurator.application.config.adapter import (
    cabinet_from_config,
    cabinet_to_config,
    product_from_config,
    product_to_config,
    wall_from_config,
)
from configurator.application.config.schemas import (
    EngineConfig,
    GroupMemberConfig,
    PanelStateConfig,
    SceneConfiguration,
    WallConfig,
)
from configurator.application.gd_applier import ViewDimensionApplier
from configurator.domain.entities import Scene
from configurator.domain.errors import DrawerEditError
from configurator.domain.events import DrawerEditRejected, EventBus
from configurator.domain.formula import (
    EngineSettings,
    FormulaEngine,
    FormulaScope,
    ManualScheduler,
    RecalcReport,
)
from configurator.domain.relations import GroupMember, GroupRelationStore, SyncRelationStore
from configurator.domain.services import (
    DependentComponentAligner,
    DimensionValueResolver,
    DrawerEditSession,
    DrawerHeightBalancer,
    WidthChangeCoordinator,
    WidthChangeResult,
)
from configurator.domain.views import ViewManager
from configurator.infrastructure import CatalogProductDataProvider, InMemoryPanelStateStore

if TYPE_CHECKING:
    from configurator.contracts.protocols import Scheduler

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"
MATERIAL_COLOR_KEY = "materialColor"


def config_to_scene(config: SceneConfiguration) -> Scene:
    """Build the cabinets of a configuration into a Scene."""
    scene = Scene(wall_from_config(config.wall))
    for cabinet_config in config.cabinets:
        scene.add(cabinet_from_config(cabinet_config))
    return scene


def _panel_state_from_config(config: SceneConfiguration) -> InMemoryPanelStateStore:
    initial = {}
    for cabinet_id, state in config.panel_state.items():
        entry: dict = {"values": dict(state.values)}
        if state.material_color is not None:
            entry[MATERIAL_COLOR_KEY] = state.material_color
        initial[cabinet_id] = entry
    return InMemoryPanelStateStore(initial)


class ConfiguratorSession:
    """One scene plus its relations, panel state, catalog and engine.

    Args:
        scene: Cabinets being configured.
        view_ids: Declared views.
        groups: Pairing relation.
        syncs: Sync relation.
        panel_state: Persisted panel values.
        products: Catalog product data.
        engine_config: Engine tuning, defaults when omitted.
        scheduler: Scheduler for the formula engine's debounced tasks;
            a ManualScheduler when omitted.
        selection: Initially selected cabinet ids.
    """

    def __init__(
        self,
        scene: Scene,
        view_ids: Iterable[str] = (),
        groups: GroupRelationStore | None = None,
        syncs: SyncRelationStore | None = None,
        panel_state: InMemoryPanelStateStore | None = None,
        products: CatalogProductDataProvider | None = None,
        engine_config: EngineConfig | None = None,
        scheduler: "Scheduler | None" = None,
        selection: Iterable[str] = (),
    ) -> None:
        self.scene = scene
        self.engine_config = engine_config or EngineConfig()
        self.views = ViewManager(scene, list(view_ids))
        self.groups = groups or GroupRelationStore()
        self.syncs = syncs or SyncRelationStore()
        self.panel_state = panel_state or InMemoryPanelStateStore()
        self.products = products or CatalogProductDataProvider()
        self.scheduler = scheduler or ManualScheduler()
        self.selection: list[str] = list(selection)

        self.events = EventBus()
        self.values = DimensionValueResolver(scene, self.panel_state, self.products)
        self.balancer = DrawerHeightBalancer(
            min_height=self.engine_config.min_drawer_height,
            max_height=self.engine_config.max_drawer_height,
        )
        self.dependents = DependentComponentAligner(scene)
        self.coordinator = WidthChangeCoordinator(
            scene,
            self.groups,
            self.syncs,
            self.views,
            dependents=self.dependents,
            balancer=self.balancer,
            events=self.events,
        )
        self.applier = ViewDimensionApplier(
            scene,
            self.views,
            self.values,
            self.coordinator,
            balancer=self.balancer,
            dependents=self.dependents,
        )
        self.scope = FormulaScope(scene, self.views, self.values, self.products)
        self.engine = FormulaEngine(
            scene,
            self.views,
            self.products,
            self.scope,
            self.applier,
            self.scheduler,
            settings=EngineSettings(
                epsilon=self.engine_config.epsilon,
                max_passes=self.engine_config.max_passes,
                recalc_delay=self.engine_config.recalc_delay,
                realign_delay=self.engine_config.realign_delay,
            ),
            realign=self._realign_views,
            events=self.events,
        )
        self._drawer_sessions: dict[str, DrawerEditSession] = {}

    @classmethod
    def from_config(
        cls, config: SceneConfiguration, scheduler: "Scheduler | None" = None
    ) -> "ConfiguratorSession":
        """Load a validated scene configuration.

        Drawer heights that do not fill their cabinet are reset to an equal
        split. Formulas are registered without scheduling a recalculation.
        """
        groups = GroupRelationStore()
        for owner, members in config.groups.items():
            groups.set_members(
                owner, [GroupMember(m.cabinet_id, m.percentage) for m in members]
            )
        syncs = SyncRelationStore()
        for owner, linked in config.syncs.items():
            for other in linked:
                if other != owner:
                    syncs.link(owner, other)

        session = cls(
            config_to_scene(config),
            view_ids=config.views,
            groups=groups,
            syncs=syncs,
            panel_state=_panel_state_from_config(config),
            products=CatalogProductDataProvider(
                product_from_config(pid, product) for pid, product in config.products.items()
            ),
            engine_config=config.engine,
            scheduler=scheduler,
            selection=config.selection,
        )
        for cabinet in session.scene:
            if session.drawer_session(cabinet.cabinet_id).resync():
                logger.debug(f"Rebalanced drawers of {cabinet.cabinet_id} on load")
        for view_id, formulas in config.formulas.items():
            for gd_id, formula in formulas.items():
                session.engine.set_formula(view_id, gd_id, formula, schedule=False)
        return session

    def to_config(self) -> SceneConfiguration:
        """Snapshot the session as a scene configuration."""
        panel_state = {}
        for cabinet_id, state in self.panel_state.to_dict().items():
            panel_state[cabinet_id] = PanelStateConfig(
                values=state.get("values", {}),
                material_color=state.get(MATERIAL_COLOR_KEY),
            )
        return SceneConfiguration(
            schema_version=SCHEMA_VERSION,
            wall=WallConfig(length=self.scene.wall.length, height=self.scene.wall.height),
            cabinets=[cabinet_to_config(c) for c in self.scene],
            views=self.views.view_ids,
            groups={
                owner: [
                    GroupMemberConfig(cabinet_id=m.cabinet_id, percentage=m.percentage)
                    for m in members
                ]
                for owner, members in self.groups.to_dict().items()
            },
            syncs=self.syncs.to_dict(),
            selection=[cid for cid in self.selection if cid in self.scene],
            products={p.product_id: product_to_config(p) for p in self.products.all()},
            panel_state=panel_state,
            formulas=self.engine.all_formulas(),
            engine=self.engine_config,
        )

    def select(self, cabinet_ids: Iterable[str]) -> None:
        ids = list(dict.fromkeys(cabinet_ids))
        for cabinet_id in ids:
            self.scene.require(cabinet_id)
        self.selection = ids

    def resize(self, cabinet_id: str, width: float) -> WidthChangeResult:
        """Edit a cabinet's width using the current selection for sync."""
        result = self.coordinator.change_width(cabinet_id, width, self.selection)
        self.engine.schedule()
        return result

    def set_height(self, cabinet_id: str, height: float) -> list[float]:
        heights = self.coordinator.change_height(cabinet_id, height)
        self.engine.schedule()
        return heights

    def set_depth(self, cabinet_id: str, depth: float) -> None:
        self.coordinator.change_depth(cabinet_id, depth)
        self.engine.schedule()

    def move(self, cabinet_id: str, x: float, y: float | None = None) -> list[str]:
        moved = self.coordinator.move(cabinet_id, x, y)
        self.engine.schedule()
        return moved

    def drawer_session(self, cabinet_id: str) -> DrawerEditSession:
        """Edit session for a cabinet's drawers, created on first use."""
        cabinet = self.scene.require(cabinet_id)
        session = self._drawer_sessions.get(cabinet_id)
        if session is None or session.cabinet is not cabinet:
            session = DrawerEditSession(cabinet, self.balancer)
            self._drawer_sessions[cabinet_id] = session
        return session

    def edit_drawer(self, cabinet_id: str, index: int, height: float) -> list[float]:
        """Commit one drawer height and rebalance the others.

        Raises:
            DrawerEditError: If the edit is rejected. A DrawerEditRejected
                event is published first and the heights are unchanged.
        """
        try:
            heights = self.drawer_session(cabinet_id).commit(index, height)
        except DrawerEditError as e:
            self.events.publish(DrawerEditRejected(cabinet_id, index, e.message))
            raise
        self.engine.schedule()
        return heights

    def set_drawer_quantity(self, cabinet_id: str, quantity: int) -> list[float]:
        heights = self.balancer.apply_quantity_change(self.scene.require(cabinet_id), quantity)
        self.engine.schedule()
        return heights

    def set_formula(self, view_id: str, gd_id: str, formula: str | None) -> None:
        self.engine.set_formula(view_id, gd_id, formula)

    def recalculate(self) -> RecalcReport:
        """Recalculate formulas now and realign every view."""
        self.engine.teardown()
        report = self.engine.recalc()
        self.engine.realign()
        return report

    def flush(self) -> int:
        """Run every pending scheduled task on a manual scheduler.

        Returns:
            Number of callbacks run; 0 for schedulers that run themselves.
        """
        if isinstance(self.scheduler, ManualScheduler):
            return self.scheduler.run_all()
        return 0

    def assign_view(self, cabinet_id: str, view_id: str | None) -> None:
        self.views.assign_cabinet_to_view(cabinet_id, view_id)
        self.engine.schedule()

    def create_view(self) -> str:
        return self.views.create_view()

    def delete_view(self, view_id: str) -> list[str]:
        """Delete a view, unassign its members and drop its formulas."""
        members = self.views.delete_view(view_id)
        self.engine.remove_view(view_id)
        return members

    def delete_cabinet(self, cabinet_id: str) -> list[str]:
        """Delete a cabinet and its dependents, cleaning every relation.

        Returns:
            Ids of every removed cabinet.
        """
        removed = self.scene.remove(cabinet_id)
        for cid in removed:
            self.groups.remove_cabinet(cid)
            self.syncs.remove_cabinet(cid)
            self.panel_state.remove(cid)
            self.values.clear_edits(cid)
            self._drawer_sessions.pop(cid, None)
        self.selection = [cid for cid in self.selection if cid not in removed]
        self.engine.schedule()
        logger.info(f"Deleted {len(removed)} cabinet(s): {removed}")
        return removed

    def _realign_views(self) -> list[str]:
        return list(self.coordinator.cohort.realign_all(self.views.view_ids))

    def close(self) -> None:
        self.engine.teardown()
