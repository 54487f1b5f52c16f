"""
اختبارات المهام
Tests for the task registry: ownership rules, assignment notifications and cascade delete
"""
from datetime import datetime, timedelta

import pytest

from app.models import Task, Notification, NotificationType


def create_task(client, headers, **body):
    payload = {"title": "Write report", "description": "Quarterly numbers"}
    payload.update(body)
    response = client.post("/api/tasks", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateTask:

    def test_create_resolves_creator_and_assignees(self, client, auth_headers, alice, bob, carol):
        """Created task comes back with creator and assignees expanded"""
        task = create_task(
            client, auth_headers(alice),
            assignedTo=[bob.id, carol.id],
            priority="high",
            dueDate="2026-11-01",
        )

        assert task["title"] == "Write report"
        assert task["status"] == "pending"
        assert task["priority"] == "high"
        assert task["dueDate"] == "2026-11-01"
        assert task["createdBy"] == {
            "id": alice.id,
            "fullName": "Alice Smith",
            "username": "alice",
            "email": "alice@example.com",
        }
        assert {u["id"] for u in task["assignedTo"]} == {bob.id, carol.id}
        for user in task["assignedTo"] + [task["createdBy"]]:
            assert "password" not in user
            assert "hashedPassword" not in user

    def test_creator_is_always_the_caller(self, client, auth_headers, alice, bob):
        """createdBy in the body is ignored, the caller owns the task"""
        task = create_task(client, auth_headers(alice), createdBy=bob.id)

        assert task["createdBy"]["id"] == alice.id

    def test_one_notification_per_assignee(self, client, db, auth_headers, alice, bob, carol):
        """إشعار واحد لكل مكلف - one assignment notification per assignee"""
        task = create_task(client, auth_headers(alice), title="Ship it", assignedTo=[bob.id, carol.id])

        notifications = db.query(Notification).all()
        assert len(notifications) == 2
        assert {n.user_id for n in notifications} == {bob.id, carol.id}
        for n in notifications:
            assert n.task_id == task["id"]
            assert n.type == NotificationType.TASK_ASSIGNED.value
            assert n.message == "You have been assigned a new task: Ship it"
            assert n.read is False

    @pytest.mark.parametrize("body", [{}, {"assignedTo": []}, {"assignedTo": None}])
    def test_no_assignees_means_no_notifications(self, client, db, auth_headers, alice, body):
        """No assignees should produce no notifications"""
        task = create_task(client, auth_headers(alice), **body)

        assert task["assignedTo"] == []
        assert db.query(Notification).count() == 0

    def test_repeated_assignee_is_stored_and_notified_once(self, client, db, auth_headers, alice, bob):
        """Repeated assignee ids collapse to one row and one notification"""
        task = create_task(client, auth_headers(alice), assignedTo=[bob.id, bob.id])

        assert [u["id"] for u in task["assignedTo"]] == [bob.id]
        assert db.query(Notification).count() == 1

    def test_unknown_assignee_is_rejected_without_side_effects(self, client, db, auth_headers, alice, bob):
        """Unknown assignee is a 404 and nothing is stored"""
        response = client.post(
            "/api/tasks",
            json={"title": "Ghost work", "assignedTo": [bob.id, "no-such-user"]},
            headers=auth_headers(alice),
        )

        assert response.status_code == 404
        assert "no-such-user" in response.json()["message"]
        assert db.query(Task).count() == 0
        assert db.query(Notification).count() == 0

    def test_snake_case_body_is_accepted(self, client, auth_headers, alice, bob):
        """snake_case field names are accepted alongside camelCase"""
        task = create_task(client, auth_headers(alice), assigned_to=[bob.id], due_date="2026-12-24")

        assert task["dueDate"] == "2026-12-24"
        assert [u["id"] for u in task["assignedTo"]] == [bob.id]

    def test_missing_title_is_a_validation_error(self, client, auth_headers, alice):
        """Title is required"""
        response = client.post("/api/tasks", json={"description": "no title"}, headers=auth_headers(alice))

        assert response.status_code == 422
        assert response.json()["message"] == "Invalid request"

    def test_invalid_status_is_rejected(self, client, auth_headers, alice):
        """Status outside the allowed set is a 422"""
        response = client.post(
            "/api/tasks",
            json={"title": "Bad", "status": "somewhere"},
            headers=auth_headers(alice),
        )

        assert response.status_code == 422


class TestListTasks:

    def test_list_all_is_admin_only(self, client, auth_headers, alice):
        """عرض جميع المهام للمدير فقط"""
        response = client.get("/api/tasks", headers=auth_headers(alice))

        assert response.status_code == 403
        assert response.json() == {"message": "Access denied"}

    def test_admin_sees_every_task_newest_first(self, client, db, auth_headers, admin, alice, bob):
        """Admin listing covers every creator, newest first"""
        first = create_task(client, auth_headers(alice), title="First")
        second = create_task(client, auth_headers(bob), title="Second")
        # Pin timestamps so ordering does not depend on clock resolution
        db.get(Task, first["id"]).created_at = datetime.utcnow() - timedelta(minutes=5)
        db.commit()

        response = client.get("/api/tasks", headers=auth_headers(admin))

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [second["id"], first["id"]]

    def test_created_lists_only_callers_tasks(self, client, auth_headers, alice, bob):
        """Created listing only shows tasks the caller created"""
        mine = create_task(client, auth_headers(alice), title="Mine")
        create_task(client, auth_headers(bob), title="Theirs")

        response = client.get("/api/tasks/created", headers=auth_headers(alice))

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [mine["id"]]

    def test_assigned_lists_only_tasks_assigned_to_caller(self, client, auth_headers, alice, bob, carol):
        """Assigned listing only shows tasks the caller is assigned to"""
        for_bob = create_task(client, auth_headers(alice), title="For Bob", assignedTo=[bob.id, carol.id])
        create_task(client, auth_headers(alice), title="For Carol", assignedTo=[carol.id])

        response = client.get("/api/tasks/assigned", headers=auth_headers(bob))

        assert response.status_code == 200
        body = response.json()
        assert [t["id"] for t in body] == [for_bob["id"]]
        assert {u["username"] for u in body[0]["assignedTo"]} == {"bob", "carol"}

    def test_requires_authentication(self, client):
        """Missing token should be a 401"""
        response = client.get("/api/tasks/created")

        assert response.status_code == 401
        assert response.json() == {"message": "Not authenticated"}

    def test_garbage_token_is_rejected(self, client):
        """Malformed bearer token should be a 401"""
        response = client.get("/api/tasks/created", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert "message" in response.json()


class TestUpdateTask:

    def test_partial_update_leaves_other_fields_alone(self, client, auth_headers, alice):
        """تحديث جزئي - fields not sent keep their values"""
        task = create_task(client, auth_headers(alice), priority="low", dueDate="2026-11-01")

        response = client.put(
            f"/api/tasks/{task['id']}",
            json={"title": "Write better report"},
            headers=auth_headers(alice),
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["title"] == "Write better report"
        assert updated["description"] == "Quarterly numbers"
        assert updated["priority"] == "low"
        assert updated["dueDate"] == "2026-11-01"

    def test_explicit_null_clears_optional_field(self, client, auth_headers, alice):
        """Explicit null clears an optional field"""
        task = create_task(client, auth_headers(alice), dueDate="2026-11-01")

        response = client.put(f"/api/tasks/{task['id']}", json={"dueDate": None}, headers=auth_headers(alice))

        assert response.status_code == 200
        assert response.json()["dueDate"] is None

    def test_null_title_is_rejected(self, client, auth_headers, alice):
        """Null title is a validation error, not a clear"""
        task = create_task(client, auth_headers(alice))

        response = client.put(f"/api/tasks/{task['id']}", json={"title": None}, headers=auth_headers(alice))

        assert response.status_code == 422

    def test_only_new_assignees_are_notified(self, client, db, auth_headers, alice, bob, carol, mallory):
        """Only assignees added by the update get a notification"""
        task = create_task(client, auth_headers(alice), assignedTo=[bob.id, carol.id])
        assert db.query(Notification).count() == 2

        response = client.put(
            f"/api/tasks/{task['id']}",
            json={"assignedTo": [bob.id, carol.id, mallory.id]},
            headers=auth_headers(alice),
        )

        assert response.status_code == 200
        assert {u["id"] for u in response.json()["assignedTo"]} == {bob.id, carol.id, mallory.id}
        new = db.query(Notification).filter(Notification.user_id == mallory.id).all()
        assert len(new) == 1
        assert new[0].message == "You have been assigned to the task: Write report"
        assert db.query(Notification).count() == 3

    def test_removing_assignees_sends_nothing(self, client, db, auth_headers, alice, bob, carol):
        """Dropping assignees sends no notifications"""
        task = create_task(client, auth_headers(alice), assignedTo=[bob.id, carol.id])

        response = client.put(
            f"/api/tasks/{task['id']}",
            json={"assignedTo": [bob.id]},
            headers=auth_headers(alice),
        )

        assert [u["id"] for u in response.json()["assignedTo"]] == [bob.id]
        assert db.query(Notification).count() == 2

    def test_new_assignee_message_uses_new_title(self, client, db, auth_headers, alice, bob):
        """Notification text uses the title after the update"""
        task = create_task(client, auth_headers(alice))

        client.put(
            f"/api/tasks/{task['id']}",
            json={"title": "Renamed", "assignedTo": [bob.id]},
            headers=auth_headers(alice),
        )

        n = db.query(Notification).one()
        assert n.message == "You have been assigned to the task: Renamed"

    def test_assignee_only_edit_touches_updated_at(self, client, db, auth_headers, alice, bob):
        """Changing only the assignees still bumps updatedAt"""
        task = create_task(client, auth_headers(alice))
        stale = datetime.utcnow() - timedelta(days=1)
        db.get(Task, task["id"]).updated_at = stale
        db.commit()

        response = client.put(f"/api/tasks/{task['id']}", json={"assignedTo": [bob.id]}, headers=auth_headers(alice))

        assert response.status_code == 200
        assert datetime.fromisoformat(response.json()["updatedAt"]) > stale

    def test_assignee_cannot_do_full_update(self, client, auth_headers, alice, bob):
        """المنشئ فقط يمكنه التعديل - assignees get a 403"""
        task = create_task(client, auth_headers(alice), assignedTo=[bob.id])

        response = client.put(f"/api/tasks/{task['id']}", json={"title": "Mine now"}, headers=auth_headers(bob))

        assert response.status_code == 403
        assert response.json() == {"message": "Not authorized to update this task"}

    def test_update_missing_task(self, client, auth_headers, alice):
        """Updating a missing task is a 404"""
        response = client.put("/api/tasks/missing", json={"title": "x"}, headers=auth_headers(alice))

        assert response.status_code == 404
        assert response.json() == {"message": "Task not found"}


class TestUpdateStatus:

    def test_assignee_can_change_status(self, client, db, auth_headers, alice, bob):
        """Assignee can move the status and no notification is sent"""
        task = create_task(client, auth_headers(alice), assignedTo=[bob.id])

        response = client.patch(
            f"/api/tasks/{task['id']}/status",
            json={"status": "in_progress"},
            headers=auth_headers(bob),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "in_progress"
        assert response.json()["createdBy"]["id"] == alice.id
        # status changes never notify
        assert db.query(Notification).count() == 1

    def test_unassigned_creator_cannot_change_status(self, client, auth_headers, alice, bob):
        """Creator who is not assigned cannot change the status"""
        task = create_task(client, auth_headers(alice), assignedTo=[bob.id])

        response = client.patch(
            f"/api/tasks/{task['id']}/status",
            json={"status": "completed"},
            headers=auth_headers(alice),
        )

        assert response.status_code == 403

    def test_status_on_missing_task(self, client, auth_headers, bob):
        """Status change on a missing task is a 404"""
        response = client.patch("/api/tasks/missing/status", json={"status": "completed"}, headers=auth_headers(bob))

        assert response.status_code == 404


class TestDeleteTask:

    def test_delete_removes_task_and_its_notifications(self, client, db, auth_headers, alice, bob, carol):
        """حذف المهمة مع إشعاراتها - other tasks keep theirs"""
        doomed = create_task(client, auth_headers(alice), assignedTo=[bob.id, carol.id])
        kept = create_task(client, auth_headers(alice), title="Keep", assignedTo=[bob.id])

        response = client.delete(f"/api/tasks/{doomed['id']}", headers=auth_headers(alice))

        assert response.status_code == 200
        assert response.json() == {"message": "Task deleted"}
        assert db.get(Task, doomed["id"]) is None
        remaining = db.query(Notification).all()
        assert [n.task_id for n in remaining] == [kept["id"]]

        listed = client.get("/api/notifications", headers=auth_headers(carol)).json()
        assert listed == []

    def test_assignee_cannot_delete(self, client, auth_headers, alice, bob):
        """Only the creator can delete"""
        task = create_task(client, auth_headers(alice), assignedTo=[bob.id])

        response = client.delete(f"/api/tasks/{task['id']}", headers=auth_headers(bob))

        assert response.status_code == 403
        assert response.json() == {"message": "Not authorized to delete this task"}

    def test_delete_missing_task(self, client, auth_headers, alice):
        """Deleting a missing task is a 404"""
        response = client.delete("/api/tasks/missing", headers=auth_headers(alice))

        assert response.status_code == 404


def test_outsider_is_forbidden_everywhere(client, auth_headers, alice, bob, mallory):
    """A user with no relation to the task cannot touch it"""
    task = create_task(client, auth_headers(alice), assignedTo=[bob.id])
    headers = auth_headers(mallory)

    put = client.put(f"/api/tasks/{task['id']}", json={"title": "Hijack"}, headers=headers)
    patch = client.patch(f"/api/tasks/{task['id']}/status", json={"status": "completed"}, headers=headers)
    delete = client.delete(f"/api/tasks/{task['id']}", headers=headers)

    assert (put.status_code, patch.status_code, delete.status_code) == (403, 403, 403)
    unchanged = client.get("/api/tasks/created", headers=auth_headers(alice)).json()
    assert unchanged[0]["title"] == "Write report"
    assert unchanged[0]["status"] == "pending"
