from __future__ import annotations

import pytest
from sqlalchemy import text

from src.meeting_tracker.meeting_tracker.core.enums import MeetingShape, UnitType
from src.meeting_tracker.meeting_tracker.core.exceptions import NotFoundError, ValidationError
from src.meeting_tracker.meeting_tracker.database.migrations import run_migrations
from src.meeting_tracker.meeting_tracker.database.profile import SchemaProfile
from src.meeting_tracker.meeting_tracker.units.model import Unit
from src.meeting_tracker.meeting_tracker.units.service import UnitService
from src.meeting_tracker.meeting_tracker.units.sql_unit_repository import SqlUnitRepository


class FakeUnitsRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Unit] = {}

    def list_all(self):
        return sorted(self.rows.values(), key=lambda u: (u.name, u.unit_id))

    def get_by_id(self, unit_id):
        return self.rows.get(int(unit_id))

    def create(self, *, name, unit_type, project):
        uid = self._next_id
        self._next_id += 1
        self.rows[uid] = Unit(unit_id=uid, name=name, unit_type=unit_type, project=project)
        return uid

    def update(self, *, unit_id, name, unit_type, project):
        if unit_id not in self.rows:
            return False
        self.rows[unit_id] = Unit(unit_id=unit_id, name=name, unit_type=unit_type, project=project)
        return True

    def delete(self, *, unit_id):
        return self.rows.pop(unit_id, None) is not None


def test_create_unit_strips_fields():
    repo = FakeUnitsRepo()
    svc = UnitService(repo)

    uid = svc.create_unit(name="  North group ", unit_type="group", project=" 3 ")

    unit = repo.get_by_id(uid)
    assert unit.name == "North group"
    assert unit.project == "3"
    assert unit.unit_type == UnitType.GROUP


@pytest.mark.parametrize("unit_type", ["", "district", "GROUP", None])
def test_create_unit_rejects_unknown_type_without_writing(unit_type):
    repo = FakeUnitsRepo()
    svc = UnitService(repo)

    with pytest.raises(ValidationError):
        svc.create_unit(name="X", unit_type=unit_type, project="1")

    assert repo.rows == {}


def test_create_unit_requires_name_and_project():
    svc = UnitService(FakeUnitsRepo())

    with pytest.raises(ValidationError, match="name"):
        svc.create_unit(name="   ", unit_type="pai", project="1")
    with pytest.raises(ValidationError, match="project"):
        svc.create_unit(name="A", unit_type="pai", project="")


def test_update_and_delete_unknown_unit():
    svc = UnitService(FakeUnitsRepo())

    with pytest.raises(NotFoundError):
        svc.update_unit(unit_id=7, name="A", unit_type="church", project="1")
    with pytest.raises(NotFoundError):
        svc.delete_unit(unit_id=7)


def test_update_replaces_all_fields():
    repo = FakeUnitsRepo()
    svc = UnitService(repo)
    uid = svc.create_unit(name="A", unit_type="group", project="1")

    svc.update_unit(unit_id=uid, name="B", unit_type="region", project="2")

    assert repo.get_by_id(uid).to_dict() == {
        "id": uid,
        "name": "B",
        "type": "region",
        "project": "2",
        "created_at": None,
    }


def test_sql_repository_lists_by_name(conn, profile):
    repo = SqlUnitRepository(conn, profile)
    b = repo.create(name="Beta", unit_type=UnitType.PAI, project="2")
    a = repo.create(name="Alpha", unit_type=UnitType.GROUP, project="1")

    assert [u.unit_id for u in repo.list_all()] == [a, b]
    assert repo.get_by_id(b).unit_type == UnitType.PAI
    assert repo.update(unit_id=a, name="Alpha 2", unit_type=UnitType.CHURCH, project="5") is True
    assert repo.get_by_id(a).project == "5"
    assert repo.delete(unit_id=a) is True
    assert repo.delete(unit_id=a) is False
    assert repo.get_by_id(a) is None


def test_sql_repository_keeps_legacy_region_column(conn):
    with conn.connect() as c:
        c.execute(
            text(
                "CREATE TABLE units (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, "
                "type TEXT NOT NULL, district TEXT NOT NULL, created_at DATETIME DEFAULT CURRENT_TIMESTAMP)"
            )
        )
    profile = run_migrations(conn)
    assert profile == SchemaProfile(version=4, meeting_shape=MeetingShape.DENORMALIZED, units_has_legacy_region=True)

    repo = SqlUnitRepository(conn, profile)
    uid = repo.create(name="Old", unit_type=UnitType.COMMUNITY, project="4")

    assert repo.get_by_id(uid).to_dict()["legacy_region"] == ""
