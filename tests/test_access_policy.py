import pytest

from taskhub.utils import access_policy as policy
from taskhub.utils.access_policy import Operation, Resource, is_allowed
from taskhub.utils.normalize import normalize_comment, normalize_project, normalize_task, normalize_user

ADMIN = normalize_user({"id": "1", "name": "Ada", "role": "admin"})
MANAGER = normalize_user({"id": "2", "name": "Max", "role": "manager"})
OTHER_MANAGER = normalize_user({"id": "3", "name": "Mia", "role": "manager"})
USER = normalize_user({"id": "4", "name": "Uma", "role": "user"})
NOBODY = normalize_user({"name": "No id", "role": "manager"})

PROJECT = normalize_project({"id": "p1", "title": "Site Revamp", "members": ["2", "4"], "createdBy": "1"})
TASK_FOR_MIA = normalize_task({"id": "t1", "projectId": "p1", "assignedTo": {"id": "3", "name": "Mia"}})
UNASSIGNED_TASK = normalize_task({"id": "t2", "projectId": "p1", "assignedTo": None})
COMMENT_BY_UMA = normalize_comment({"id": "c1", "text": "hi", "author": "4", "taskId": "t1"})


class TestProjects:
    @pytest.mark.parametrize("actor, allowed", [(ADMIN, True), (MANAGER, True), (OTHER_MANAGER, True), (USER, False)])
    def test_create_and_modify_are_role_only(self, actor, allowed):
        assert policy.can_create_project(actor) is allowed
        assert policy.can_modify_project(actor, PROJECT) is allowed

    def test_modify_ignores_creator_and_membership(self):
        # Mia neither created nor belongs to the project
        assert policy.can_modify_project(OTHER_MANAGER, PROJECT)
        assert not policy.is_member(OTHER_MANAGER, PROJECT)


class TestTasks:
    def test_create(self):
        assert policy.can_create_task(ADMIN, None)
        assert policy.can_create_task(MANAGER, PROJECT)
        assert not policy.can_create_task(OTHER_MANAGER, PROJECT)
        assert not policy.can_create_task(USER, PROJECT)
        assert not policy.can_create_task(MANAGER, None)

    def test_member_manager_modifies_task_assigned_to_someone_else(self):
        assert policy.can_modify_task(MANAGER, TASK_FOR_MIA, PROJECT)

    def test_assignee_manager_outside_project(self):
        assert policy.can_modify_task(OTHER_MANAGER, TASK_FOR_MIA, PROJECT)
        assert not policy.can_modify_task(OTHER_MANAGER, UNASSIGNED_TASK, PROJECT)

    def test_plain_users_never_modify_tasks(self):
        assert not policy.can_modify_task(USER, UNASSIGNED_TASK, PROJECT)

    def test_missing_project_is_a_failed_check(self):
        assert not policy.can_modify_task(MANAGER, UNASSIGNED_TASK, None)
        assert policy.can_modify_task(ADMIN, None, None)

    def test_actor_without_id_never_matches_unassigned_sentinel(self):
        assert not policy.is_assignee(NOBODY, UNASSIGNED_TASK)
        assert not policy.can_modify_task(NOBODY, UNASSIGNED_TASK, PROJECT)


class TestComments:
    def test_manager_not_assigned_cannot_comment(self):
        assert not policy.can_create_comment(MANAGER, TASK_FOR_MIA)

    def test_manager_can_comment_without_assignment_data(self):
        assert policy.can_create_comment(MANAGER, UNASSIGNED_TASK)
        assert policy.can_create_comment(MANAGER, None)

    def test_assignee_and_admin_comment(self):
        assert policy.can_create_comment(OTHER_MANAGER, TASK_FOR_MIA)
        assert policy.can_create_comment(ADMIN, TASK_FOR_MIA)
        assert not policy.can_create_comment(USER, UNASSIGNED_TASK)

    @pytest.mark.parametrize("actor, allowed", [
        (USER, True),        # author
        (MANAGER, True),     # any manager
        (ADMIN, True),
        (normalize_user({"id": "9", "role": "user"}), False),
    ])
    def test_modify(self, actor, allowed):
        assert policy.can_modify_comment(actor, COMMENT_BY_UMA) is allowed


class TestUsers:
    def test_admin_only_management(self):
        assert policy.can_manage_users(ADMIN)
        assert not policy.can_manage_users(MANAGER)

    def test_view_self_or_admin(self):
        assert policy.can_view_user(USER, USER)
        assert policy.can_view_user(ADMIN, USER)
        assert not policy.can_view_user(MANAGER, USER)


class TestIsAllowed:
    def test_dispatches_to_predicates(self):
        assert is_allowed(MANAGER, Resource.PROJECT, Operation.CREATE)
        assert not is_allowed(USER, "project", "delete", entity=PROJECT)
        assert is_allowed(MANAGER, "task", "update", entity=TASK_FOR_MIA, project=PROJECT)
        assert not is_allowed(MANAGER, "comment", "create", task=TASK_FOR_MIA)
        assert is_allowed(USER, "comment", "delete", entity=COMMENT_BY_UMA)
        assert not is_allowed(MANAGER, "user", "manage")
        assert is_allowed(USER, "user", "read", entity=USER)

    def test_reads_need_an_actor(self):
        assert is_allowed(USER, "task", "read", entity=TASK_FOR_MIA)
        assert not is_allowed(None, "task", "read", entity=TASK_FOR_MIA)

    def test_unknown_operation_raises(self):
        with pytest.raises(ValueError):
            is_allowed(ADMIN, "project", "archive")


def test_decisions_are_deterministic_and_inputs_untouched():
    before = [r.model_copy(deep=True) for r in (MANAGER, PROJECT, TASK_FOR_MIA, COMMENT_BY_UMA)]
    checks = [
        lambda: policy.can_modify_task(MANAGER, TASK_FOR_MIA, PROJECT),
        lambda: policy.can_create_comment(MANAGER, TASK_FOR_MIA),
        lambda: policy.can_modify_comment(MANAGER, COMMENT_BY_UMA),
        lambda: policy.can_create_task(MANAGER, PROJECT),
    ]
    first = [check() for check in checks]
    assert [check() for check in checks] == first
    assert [MANAGER, PROJECT, TASK_FOR_MIA, COMMENT_BY_UMA] == before
