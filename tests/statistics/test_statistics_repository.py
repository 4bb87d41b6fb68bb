from __future__ import annotations

from src.meeting_tracker.meeting_tracker.core.enums import GroupBy
from src.meeting_tracker.meeting_tracker.statistics.factory import GroupingStrategyFactory
from src.meeting_tracker.meeting_tracker.statistics.service import StatisticsService
from src.meeting_tracker.meeting_tracker.statistics.sql_statistics_repository import SqlStatisticsRepository


def _service(conn, profile):
    return StatisticsService(SqlStatisticsRepository(conn, profile))


def test_by_project_within_range(conn, profile, insert_meeting):
    insert_meeting(project="1", unit_type="group", meeting_date="2024-01-05", participants=10)
    insert_meeting(project="1", unit_type="pai", meeting_date="2024-01-20", participants=20)
    insert_meeting(project="1", unit_type="group", meeting_date="2024-02-01", participants=99)

    rows = _service(conn, profile).summarize(start_date="2024-01-01", end_date="2024-01-31", group_by="by_project")

    assert len(rows) == 1
    assert (rows[0].project, rows[0].meeting_count, rows[0].total_participants) == ("1", 2, 30)
    assert rows[0].avg_participants == 15.0


def test_counts_add_up_to_meetings_in_range(conn, profile, insert_meeting):
    data = [
        ("1", "group", "2024-03-01", 4),
        ("2", "group", "2024-03-02", 6),
        ("2", "church", "2024-03-03", 0),
        ("3", "region", "2024-03-04", 8),
        ("3", "region", "2024-04-01", 8),
    ]
    for project, unit_type, day, people in data:
        insert_meeting(project=project, unit_type=unit_type, meeting_date=day, participants=people)

    service = _service(conn, profile)
    for mode in GroupBy:
        rows = service.summarize(start_date="2024-03-01", end_date="2024-03-31", group_by=mode.value)
        assert sum(r.meeting_count for r in rows) == 4
        assert sum(r.total_participants for r in rows) == 18


def test_by_unit_groups_by_type_not_by_name(conn, profile, insert_meeting):
    insert_meeting(project="1", unit_type="group", participants=5)
    insert_meeting(project="2", unit_type="group", participants=7)
    insert_meeting(project="2", unit_type="pai", participants=1)

    rows = _service(conn, profile).summarize(group_by="by_unit")

    assert [(r.unit_label, r.meeting_count, r.total_participants) for r in rows] == [("group", 2, 12), ("pai", 1, 1)]
    assert all(r.project == "" for r in rows)


def test_by_project_and_unit_orders_by_both_keys(conn, profile, insert_meeting):
    insert_meeting(project="2", unit_type="pai")
    insert_meeting(project="1", unit_type="pai")
    insert_meeting(project="1", unit_type="church")

    rows = _service(conn, profile).summarize(group_by="by_project_and_unit")

    assert [(r.project, r.unit_type) for r in rows] == [("1", "church"), ("1", "pai"), ("2", "pai")]


def test_empty_database_yields_no_rows(conn, profile):
    repo = SqlStatisticsRepository(conn, profile)
    strategy = GroupingStrategyFactory().for_mode(GroupBy.BY_PROJECT)

    assert repo.group_totals(strategy=strategy) == []
