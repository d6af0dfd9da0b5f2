from datetime import date, datetime, timezone

import pytest

from taskhub.schemas.user import UserRef
from taskhub.utils.normalize import (
    UNASSIGNED,
    UNKNOWN_PROJECT,
    UNKNOWN_USER,
    UNTITLED_PROJECT,
    UNTITLED_TASK,
    canonical_priority,
    canonical_project_status,
    canonical_role,
    canonical_task_status,
    normalize_comment,
    normalize_many,
    normalize_project,
    normalize_task,
    normalize_user,
    normalize_user_ref,
    serialize,
)

CREATED = "2024-03-01T09:30:00Z"

PROJECT_SHAPES = [
    {"_id": "p1", "name": "Site Revamp", "members": ["u1", "u2"], "createdBy": "u1", "createdAt": CREATED},
    {
        "id": 7,
        "title": "Site Revamp",
        "status": "in progress",
        "members": [{"_id": "u1", "name": "Max"}, {"id": "u1", "name": "Max again"}, {"name": "no id"}],
        "createdBy": {"id": "u1", "name": "Max", "role": "Manager"},
    },
    {"project": {"_id": "p2", "title": "Wrapped"}},
    {},
]

TASK_SHAPES = [
    {"_id": "t1", "title": "Design mockups", "projectId": "p1", "assignedTo": None, "createdAt": CREATED},
    {
        "id": 3,
        "title": "Write copy",
        "status": "completed",
        "priority": "HIGH",
        "dueDate": "2024-05-01T00:00:00.000Z",
        "projectId": {"_id": "p1", "name": "Site Revamp"},
        "assignedTo": {"_id": "u2", "name": "Uma", "email": "uma@example.com"},
    },
    {"id": "t4", "project": {"id": "p9", "title": "Nested"}, "assignedTo": "u5", "status": "In Progress"},
    {"id": "t5", "projectId": "p3", "projectName": "From list view", "priority": "urgent"},
    {"task": {"id": "t6", "title": "Wrapped"}},
    {},
]

COMMENT_SHAPES = [
    {"_id": "c1", "text": "Looks good", "author": {"_id": "u1", "name": "Max"}, "taskId": "t1", "timestamp": CREATED},
    {"id": 2, "text": "No author", "taskId": {"_id": "t1"}, "createdAt": CREATED},
    {"id": "c3", "text": "Bare author", "author": "u2"},
]

USER_SHAPES = [
    {"_id": "u1", "name": "Max", "email": "max@example.com", "role": "Manager"},
    {"id": 4, "username": "legacy", "role": "superuser"},
    {"user": {"id": "u9", "name": "Wrapped"}, "token": "abc"},
]


class TestVocabulary:
    @pytest.mark.parametrize("raw, expected", [
        (None, "todo"),
        ("", "todo"),
        ("pending", "todo"),
        ("In Progress", "in-progress"),
        ("in_progress", "in-progress"),
        ("completed", "done"),
        ("DONE", "done"),
        ("blocked", "blocked"),
    ])
    def test_task_status_accepts_both_vocabularies(self, raw, expected):
        assert canonical_task_status(raw) == expected

    def test_project_status_is_open(self):
        assert canonical_project_status(None) == "pending"
        assert canonical_project_status("  ") == "pending"
        assert canonical_project_status(" on hold ") == "on hold"

    def test_priority_and_role_fall_back(self):
        assert canonical_priority("High") == "high"
        assert canonical_priority("urgent") == "medium"
        assert canonical_role("ADMIN") == "admin"
        assert canonical_role("superuser") == "user"
        assert canonical_role(None) == "user"


class TestNormalizeProject:
    def test_legacy_shape(self):
        project = normalize_project(PROJECT_SHAPES[0])
        assert project.id == "p1"
        assert project.title == "Site Revamp"
        assert project.status == "pending"
        assert project.description == ""
        assert project.member_ids == ["u1", "u2"]
        assert project.members[0].name == UNKNOWN_USER
        assert project.created_by.id == "u1"
        assert project.created_at == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        assert project.updated_at == project.created_at

    def test_members_deduplicated_and_idless_entries_dropped(self):
        project = normalize_project(PROJECT_SHAPES[1])
        assert project.id == "7"
        assert project.member_ids == ["u1"]
        assert project.members[0].name == "Max"
        assert project.created_by.role == "manager"

    def test_missing_fields_get_defaults(self):
        project = normalize_project({})
        assert project.id == ""
        assert project.title == UNTITLED_PROJECT
        assert project.members == []
        assert project.created_by == UserRef(id="", name=UNKNOWN_USER)

    def test_envelope_is_unwrapped(self):
        assert normalize_project(PROJECT_SHAPES[2]).title == "Wrapped"


class TestNormalizeTask:
    def test_unassigned_task_in_bare_project(self):
        task = normalize_task(TASK_SHAPES[0])
        assert task.status == "todo"
        assert task.priority == "medium"
        assert task.project_id == "p1"
        assert task.project.title == UNKNOWN_PROJECT
        assert task.assigned_to == UserRef(id="", name=UNASSIGNED)
        assert not task.is_assigned
        assert task.due_date is None

    def test_nested_relations_and_legacy_status(self):
        task = normalize_task(TASK_SHAPES[1])
        assert task.id == "3"
        assert task.status == "done"
        assert task.priority == "high"
        assert task.due_date == date(2024, 5, 1)
        assert task.project.title == "Site Revamp"
        assert task.assigned_to.id == "u2"
        assert task.assigned_to.email == "uma@example.com"
        assert task.is_assigned

    def test_project_key_and_bare_assignee(self):
        task = normalize_task(TASK_SHAPES[2])
        assert task.project_id == "p9"
        assert task.status == "in-progress"
        assert task.assigned_to == UserRef(id="u5", name=UNKNOWN_USER)

    def test_project_name_fills_unknown_title(self):
        task = normalize_task(TASK_SHAPES[3])
        assert task.project.title == "From list view"
        assert task.priority == "medium"

    def test_empty_payload(self):
        task = normalize_task({})
        assert task.title == UNTITLED_TASK
        assert task.project.id == ""
        assert task.project.title == UNKNOWN_PROJECT

    @pytest.mark.parametrize("due", [None, "", "tomorrow", 42])
    def test_unparseable_due_date_is_none(self, due):
        assert normalize_task({"dueDate": due}).due_date is None


class TestNormalizeComment:
    def test_author_sentinel_and_task_from_object(self):
        comment = normalize_comment(COMMENT_SHAPES[1])
        assert comment.author == UserRef(id="", name=UNKNOWN_USER)
        assert comment.task_id == "t1"
        assert comment.timestamp == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)

    def test_task_id_filled_from_context(self):
        comment = normalize_comment(COMMENT_SHAPES[2], task_id="t8")
        assert comment.task_id == "t8"
        assert comment.author.id == "u2"

    def test_payload_task_wins_over_context(self):
        assert normalize_comment(COMMENT_SHAPES[0], task_id="other").task_id == "t1"


class TestNormalizeUser:
    def test_shapes(self):
        assert normalize_user(USER_SHAPES[0]).role == "manager"
        legacy = normalize_user(USER_SHAPES[1])
        assert legacy.id == "4"
        assert legacy.name == "legacy"
        assert legacy.role == "user"
        assert normalize_user(USER_SHAPES[2]).id == "u9"

    def test_user_ref_sentinels(self):
        assert normalize_user_ref(None) == UserRef(id="", name=UNKNOWN_USER)
        assert normalize_user_ref(None, missing_name=UNASSIGNED).name == UNASSIGNED
        assert normalize_user_ref("  ") == UserRef(id="", name=UNKNOWN_USER)
        assert normalize_user_ref(12) == UserRef(id="12", name=UNKNOWN_USER)


class TestNormalizeMany:
    def test_bare_list_and_envelope(self):
        assert [t.id for t in normalize_many([{"id": 1}, {"id": 2}], normalize_task, "tasks")] == ["1", "2"]
        assert [t.id for t in normalize_many({"tasks": [{"id": 1}]}, normalize_task, "tasks")] == ["1"]

    @pytest.mark.parametrize("payload", [None, "oops", {"items": []}, {"tasks": None}])
    def test_unusable_payload_is_empty(self, payload):
        assert normalize_many(payload, normalize_task, "tasks") == []

    def test_non_mapping_items_are_skipped(self):
        assert len(normalize_many([{"id": 1}, None, "t2"], normalize_task, "tasks")) == 1


@pytest.mark.parametrize("normalizer, shapes", [
    (normalize_project, PROJECT_SHAPES),
    (normalize_task, TASK_SHAPES),
    (normalize_comment, COMMENT_SHAPES),
    (normalize_user, USER_SHAPES),
])
def test_idempotent_and_round_trip(normalizer, shapes):
    for wire in shapes:
        record = normalizer(wire)
        assert normalizer(record) == record
        assert normalizer(serialize(record)) == record


def test_serialize_uses_wire_names():
    data = serialize(normalize_task(TASK_SHAPES[1]))
    assert data["projectId"] == "p1"
    assert data["assignedTo"]["id"] == "u2"
    assert data["dueDate"] == "2024-05-01"
    assert data["project"] == {"id": "p1", "title": "Site Revamp"}
