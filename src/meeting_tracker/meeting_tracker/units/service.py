from __future__ import annotations

import logging
from typing import Any, Sequence

from ..common.validators import require_non_empty, require_unit_type
from ..core.exceptions import NotFoundError
from .model import Unit
from .repository import UnitRepository

logger = logging.getLogger(__name__)


class UnitService:
    """Use case: maintain the unit directory."""

    def __init__(self, units: UnitRepository):
        self._units = units

    def list_units(self) -> Sequence[Unit]:
        return self._units.list_all()

    def create_unit(self, *, name: Any, unit_type: Any, project: Any) -> int:
        name = require_non_empty(name, "name")
        project = require_non_empty(project, "project")
        kind = require_unit_type(unit_type)

        unit_id = self._units.create(name=name, unit_type=kind, project=project)
        logger.info("Unit %s created (%s, project %s)", unit_id, kind.value, project)
        return unit_id

    def update_unit(self, *, unit_id: int, name: Any, unit_type: Any, project: Any) -> None:
        name = require_non_empty(name, "name")
        project = require_non_empty(project, "project")
        kind = require_unit_type(unit_type)

        if not self._units.update(unit_id=int(unit_id), name=name, unit_type=kind, project=project):
            raise NotFoundError("Unit not found")

    def delete_unit(self, *, unit_id: int) -> None:
        if not self._units.delete(unit_id=int(unit_id)):
            raise NotFoundError("Unit not found")
        logger.info("Unit %s deleted", unit_id)
