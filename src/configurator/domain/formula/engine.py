"""Global-dimension formula engine.

Each view can bind a formula to any GD id. A recalculation evaluates every
binding against the live scene and pushes changed values through the
injected GD applier. Because applying one value can change what another
formula reads, the engine repeats for a bounded number of passes and stops
as soon as a pass changes nothing.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable

from ..catalog import ProductData
from ..entities import NO_VIEW, Scene
from ..errors import ConstraintError, FormulaError
from ..events import EventBus, FormulasApplied, ViewRealigned
from .interpreter import FormulaInterpreter
from .scope import FormulaScope

if TYPE_CHECKING:
    from ...contracts.protocols import (
        GDValueApplier,
        ProductDataProvider,
        ScheduledHandle,
        Scheduler,
        ViewMembershipProvider,
    )

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 0.1
DEFAULT_MAX_PASSES = 3
DEFAULT_RECALC_DELAY = 0.3
DEFAULT_REALIGN_DELAY = 0.4


class EngineState(str, Enum):
    IDLE = "idle"
    EVALUATING = "evaluating"
    APPLYING = "applying"


@dataclass(frozen=True)
class EngineSettings:
    """Tuning knobs for the formula engine.

    Attributes:
        epsilon: Differences smaller than this are not changes.
        max_passes: Upper bound on evaluation passes per recalculation.
        recalc_delay: Debounce delay of the recompute task, in seconds.
        realign_delay: Debounce delay of the realignment task, in seconds.
    """

    epsilon: float = DEFAULT_EPSILON
    max_passes: int = DEFAULT_MAX_PASSES
    recalc_delay: float = DEFAULT_RECALC_DELAY
    realign_delay: float = DEFAULT_REALIGN_DELAY

    def __post_init__(self) -> None:
        if self.epsilon <= 0:
            raise ValueError("epsilon must be positive")
        if self.max_passes < 1:
            raise ValueError("max_passes must be at least 1")
        if self.recalc_delay < 0 or self.realign_delay < 0:
            raise ValueError("Delays cannot be negative")


def formula_key(view_id: str, gd_id: str) -> str:
    return f"{view_id}:{gd_id}"


@dataclass
class RecalcReport:
    """Outcome of one recalculation.

    Attributes:
        passes: Evaluation passes that ran.
        applied: ``"view:gd"`` keys applied, in application order. A key
            appears once per pass that changed it.
        errors: Keys whose formula or application failed, with the message.
        skipped: True when the call was re-entrant and did nothing.
    """

    passes: int = 0
    applied: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)
    skipped: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.applied)


class FormulaEngine:
    """Evaluates per-view GD formulas to a bounded fixed point.

    Args:
        scene: Cabinets being configured.
        views: View membership provider.
        products: Catalog product data provider.
        scope: Resolver for ``cab``/``dim``/``viewGd``.
        applier: Writes GD values back to cabinets.
        scheduler: Runs the debounced recompute and realign tasks.
        settings: Epsilon, pass limit and delays.
        realign: Callback run by the realign task, typically a view cohort
            realignment. Returns the realigned view ids.
        events: Bus receiving FormulasApplied and ViewRealigned.
        clock: Timestamp source for last-evaluated bookkeeping.
        on_formulas_applied: Optional callback after a changing recalc.
    """

    def __init__(
        self,
        scene: Scene,
        views: "ViewMembershipProvider",
        products: "ProductDataProvider",
        scope: FormulaScope,
        applier: "GDValueApplier",
        scheduler: "Scheduler",
        settings: EngineSettings | None = None,
        realign: Callable[[], list[str]] | None = None,
        events: EventBus | None = None,
        clock: Callable[[], float] = time.time,
        on_formulas_applied: Callable[[RecalcReport], None] | None = None,
        interpreter: FormulaInterpreter | None = None,
    ) -> None:
        self._scene = scene
        self._views = views
        self._products = products
        self._scope = scope
        self._applier = applier
        self._scheduler = scheduler
        self.settings = settings or EngineSettings()
        self._realign = realign
        self.events = events or EventBus()
        self._clock = clock
        self._on_formulas_applied = on_formulas_applied
        self.interpreter = interpreter or FormulaInterpreter()

        self.state = EngineState.IDLE
        self._formulas: dict[str, dict[str, str]] = {}
        self._last_evaluated_at: dict[str, float] = {}
        self._recalc_handle: "ScheduledHandle | None" = None
        self._realign_handle: "ScheduledHandle | None" = None

    def set_formula(
        self, view_id: str, gd_id: str, formula: str | None, schedule: bool = True
    ) -> None:
        """Bind, replace or remove (blank formula) a view's GD formula."""
        if not view_id or view_id == NO_VIEW:
            raise FormulaError(f"Formulas need a view, got {view_id!r}", formula)
        text = (formula or "").strip()
        current = dict(self._formulas.get(view_id, {}))
        if text:
            current[gd_id] = text
        else:
            current.pop(gd_id, None)
        if current:
            self._formulas[view_id] = current
        else:
            self._formulas.pop(view_id, None)
        if schedule:
            self.schedule()

    def get_formula(self, view_id: str, gd_id: str) -> str | None:
        return self._formulas.get(view_id, {}).get(gd_id)

    def formulas_for_view(self, view_id: str) -> dict[str, str]:
        return dict(self._formulas.get(view_id, {}))

    def all_formulas(self) -> dict[str, dict[str, str]]:
        return {view_id: dict(f) for view_id, f in self._formulas.items()}

    def remove_view(self, view_id: str) -> None:
        """Forget every formula bound to a deleted view."""
        self._formulas.pop(view_id, None)
        for key in [k for k in self._last_evaluated_at if k.startswith(f"{view_id}:")]:
            del self._last_evaluated_at[key]

    def last_evaluated_at(self, view_id: str, gd_id: str) -> float | None:
        return self._last_evaluated_at.get(formula_key(view_id, gd_id))

    @property
    def has_pending_tasks(self) -> bool:
        return self._recalc_handle is not None or self._realign_handle is not None

    def schedule(self) -> None:
        """(Re)arm the recompute and realign tasks.

        A newer call cancels whatever is still pending, so bursts of edits
        coalesce into one recompute followed by one realignment.
        """
        self._cancel_pending()
        self._recalc_handle = self._scheduler.call_later(
            self.settings.recalc_delay, self._run_scheduled_recalc
        )
        self._realign_handle = self._scheduler.call_later(
            self.settings.realign_delay, self._run_scheduled_realign
        )

    def teardown(self) -> None:
        """Cancel pending tasks."""
        self._cancel_pending()

    def _cancel_pending(self) -> None:
        for handle in (self._recalc_handle, self._realign_handle):
            if handle is not None:
                handle.cancel()
        self._recalc_handle = None
        self._realign_handle = None

    def _run_scheduled_recalc(self) -> None:
        self._recalc_handle = None
        self.recalc()

    def _run_scheduled_realign(self) -> None:
        self._realign_handle = None
        if self._recalc_handle is not None:
            # Realignment must see the latest values.
            self._recalc_handle.cancel()
            self._recalc_handle = None
            self.recalc()
        self.realign()

    def realign(self) -> list[str]:
        """Run the realignment callback and publish ViewRealigned."""
        if self._realign is None:
            return []
        view_ids = list(self._realign())
        self.events.publish(ViewRealigned(tuple(view_ids)))
        return view_ids

    def _view_products(self, view_id: str) -> dict[str, ProductData]:
        products: dict[str, ProductData] = {}
        for cabinet_id in self._views.get_cabinets_in_view(view_id):
            cabinet = self._scene.get(cabinet_id)
            if cabinet is None or cabinet.product_id is None:
                continue
            if cabinet.product_id in products:
                continue
            product = self._products.get_product_data(cabinet.product_id)
            if product is not None:
                products[cabinet.product_id] = product
        return products

    def recalc(self) -> RecalcReport:
        """Evaluate every formula and apply changed values.

        A call made while a recalculation is already running (for example
        from a side effect of applying a value) returns a skipped report
        without doing anything.

        Returns:
            RecalcReport describing passes, applied keys and errors.
        """
        if self.state is not EngineState.IDLE:
            logger.debug(f"Ignoring re-entrant recalc while {self.state.value}")
            return RecalcReport(skipped=True)

        report = RecalcReport()
        epsilon = self.settings.epsilon
        self.state = EngineState.EVALUATING
        try:
            for pass_index in range(self.settings.max_passes):
                report.passes = pass_index + 1
                pass_applied = False
                host = self._scope.host_functions()

                for view_id, formulas in list(self._formulas.items()):
                    if not self._views.get_cabinets_in_view(view_id):
                        continue
                    products = self._view_products(view_id)
                    if not products:
                        continue

                    for gd_id, formula in list(formulas.items()):
                        key = formula_key(view_id, gd_id)
                        try:
                            result = self.interpreter.evaluate(formula, host)
                        except FormulaError as e:
                            logger.warning(f"Invalid formula for {key}: {formula!r}: {e}")
                            report.errors[key] = str(e)
                            continue
                        if not math.isfinite(result):
                            logger.warning(f"Formula for {key} is not finite, skipping")
                            continue

                        current = self._scope.view_gd_value(view_id, gd_id)
                        if current is not None and abs(result - current) < epsilon:
                            continue

                        self.state = EngineState.APPLYING
                        try:
                            changed = self._applier.apply_gd_value(
                                view_id, gd_id, result, products
                            )
                        except ConstraintError as e:
                            logger.warning(f"Could not apply {key} = {result}: {e}")
                            report.errors[key] = str(e)
                            continue
                        finally:
                            self.state = EngineState.EVALUATING

                        if not changed:
                            logger.debug(f"Nothing in view {view_id} took {key} = {result}")
                            continue

                        logger.debug(f"Applied {key}: {current} -> {result}")
                        pass_applied = True
                        report.applied.append(key)

                if not pass_applied:
                    break
        finally:
            self.state = EngineState.IDLE

        if report.applied:
            now = self._clock()
            for key in report.applied:
                self._last_evaluated_at[key] = now
            logger.info(
                f"Applied {len(report.applied)} formula value(s) in {report.passes} pass(es)"
            )
            self.events.publish(FormulasApplied(tuple(report.applied), report.passes))
            if self._on_formulas_applied is not None:
                self._on_formulas_applied(report)
        return report
