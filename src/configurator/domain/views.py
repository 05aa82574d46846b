"""View management: lettered cohorts of cabinets."""

from __future__ import annotations

import logging
import string

from .entities import NO_VIEW, Scene
from .errors import ViewError

logger = logging.getLogger(__name__)

VIEW_LETTERS = string.ascii_uppercase
MAX_VIEWS = len(VIEW_LETTERS)


class ViewManager:
    """Creates views and tracks which cabinets belong to them.

    Membership is derived from each cabinet's ``view_id``; the manager only
    owns the set of view letters that exist.

    Example:
        >>> manager = ViewManager(scene)
        >>> view_id = manager.create_view()
        >>> manager.assign_cabinet_to_view("c1", view_id)
        >>> manager.get_cabinets_in_view(view_id)
        ['c1']
    """

    def __init__(self, scene: Scene, view_ids: list[str] | None = None) -> None:
        self._scene = scene
        self._views: list[str] = []
        for view_id in view_ids or []:
            self.add_view(view_id)
        for cabinet in scene:
            if cabinet.has_view and cabinet.view_id not in self._views:
                self.add_view(cabinet.view_id)

    @property
    def view_ids(self) -> list[str]:
        return list(self._views)

    def has_view(self, view_id: str) -> bool:
        return view_id in self._views

    def add_view(self, view_id: str) -> None:
        """Register a view with an explicit letter (used when loading scenes)."""
        if view_id not in VIEW_LETTERS or len(view_id) != 1:
            raise ViewError(f"Invalid view id: {view_id!r}")
        if view_id in self._views:
            raise ViewError(f"View {view_id} already exists")
        self._views.append(view_id)

    def create_view(self) -> str:
        """Create a view using the next free letter.

        Raises:
            ViewError: If all 26 letters are taken.
        """
        for letter in VIEW_LETTERS:
            if letter not in self._views:
                self._views.append(letter)
                logger.debug(f"Created view {letter}")
                return letter
        raise ViewError(f"Maximum number of views ({MAX_VIEWS}) reached")

    def delete_view(self, view_id: str) -> list[str]:
        """Delete a view and unassign its members.

        Returns:
            Ids of the cabinets that were unassigned.
        """
        if view_id == NO_VIEW:
            raise ViewError("Cannot delete the 'none' view")
        if view_id not in self._views:
            raise ViewError(f"View {view_id} does not exist")
        members = self.get_cabinets_in_view(view_id)
        for cabinet_id in members:
            self._scene.require(cabinet_id).view_id = NO_VIEW
        self._views.remove(view_id)
        return members

    def assign_cabinet_to_view(self, cabinet_id: str, view_id: str | None) -> None:
        """Move a cabinet into a view; ``"none"`` or None unassigns it."""
        cabinet = self._scene.require(cabinet_id)
        if view_id is None or view_id == NO_VIEW:
            cabinet.view_id = NO_VIEW
            return
        if view_id not in self._views:
            raise ViewError(f"View {view_id} does not exist")
        cabinet.view_id = view_id

    def get_cabinets_in_view(self, view_id: str) -> list[str]:
        """Member ids in scene order. The "none" view has no members."""
        if view_id is None or view_id == NO_VIEW:
            return []
        return [c.cabinet_id for c in self._scene if c.view_id == view_id]

    def get_cabinet_view(self, cabinet_id: str) -> str | None:
        cabinet = self._scene.get(cabinet_id)
        if cabinet is None or not cabinet.has_view:
            return None
        return cabinet.view_id

    def are_cabinets_in_same_view(self, first_id: str, second_id: str) -> bool:
        view_id = self.get_cabinet_view(first_id)
        return view_id is not None and view_id == self.get_cabinet_view(second_id)
