"""Tests for admin user management, including self-demotion and self-deletion guards."""

import unittest
from unittest.mock import MagicMock

from app.core.exceptions import BadRequestError, ErrorCode, NotFoundError
from app.models import Role
from app.schemas.auth import AuthContext
from app.schemas.user import UserUpdateRequest
from app.services import auth as auth_service
from app.services.users import soft_delete_user, update_user
from support import ApiTestCase, DatabaseTestCase

USERS_URL = "/api/protected/user"


class TestAdminGate(ApiTestCase):
    def test_non_admin_is_denied(self) -> None:
        _, client = self.login_as("plain@example.com")
        resp = client.get(f"{USERS_URL}/")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"message": "Access Denied. Admins only", "errorCode": 4001})

    def test_root_role_is_denied(self) -> None:
        _, client = self.login_as("root@example.com", role=Role.ROOT.value)
        self.assertEqual(client.get(f"{USERS_URL}/").status_code, 401)

    def test_unauthenticated_gets_generic_unauthorized(self) -> None:
        resp = self.client.get(f"{USERS_URL}/")
        self.assertEqual(resp.json(), {"message": "Unauthorized", "errorCode": 4001})

    def test_demoted_admin_loses_access_on_next_request(self) -> None:
        admin_id, client = self.login_as("admin@example.com", role=Role.ADMIN.value)
        _, other_admin = self.login_as("admin2@example.com", role=Role.ADMIN.value)
        self.assertEqual(client.get(f"{USERS_URL}/").status_code, 200)

        other_admin.patch(f"{USERS_URL}/{admin_id}", json={"role": "USER"})

        self.assertEqual(client.get(f"{USERS_URL}/").status_code, 401)


class TestAdminReads(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_id, self.admin = self.login_as("admin@example.com", role=Role.ADMIN.value)
        self.active_id = self.create_user("active@example.com")
        self.deleted_id = self.create_user("deleted@example.com", deleted=True)

    def test_list_includes_everyone_without_password(self) -> None:
        resp = self.admin.get(f"{USERS_URL}/")
        self.assertEqual(resp.status_code, 200)
        users = resp.json()
        self.assertEqual(
            [u["id"] for u in users], [self.admin_id, self.active_id, self.deleted_id]
        )
        for u in users:
            self.assertNotIn("password_hash", u)
            self.assertNotIn("password", u)

    def test_filter_by_deleted_flag(self) -> None:
        deleted = self.admin.get(f"{USERS_URL}/user", params={"deleted": "true"}).json()
        active = self.admin.get(f"{USERS_URL}/user").json()
        self.assertEqual([u["id"] for u in deleted], [self.deleted_id])
        self.assertEqual([u["id"] for u in active], [self.admin_id, self.active_id])

    def test_get_one_and_missing(self) -> None:
        resp = self.admin.get(f"{USERS_URL}/{self.active_id}")
        self.assertEqual(resp.json()["email"], "active@example.com")
        missing = self.admin.get(f"{USERS_URL}/9999")
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json(), {"message": "User not found", "errorCode": 1001})


class TestAdminUpdate(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_id, self.admin = self.login_as("admin@example.com", role=Role.ADMIN.value)
        self.target_id = self.create_user("target@example.com", name="Target User")

    def test_update_other_user(self) -> None:
        resp = self.admin.patch(
            f"{USERS_URL}/{self.target_id}", json={"name": "Renamed User", "role": "ADMIN"}
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"], "User updated")
        self.assertEqual(body["user"]["name"], "Renamed User")
        self.assertEqual(body["user"]["role"], "ADMIN")
        self.assertNotIn("password_hash", body["user"])

    def test_password_change_is_hashed_and_usable(self) -> None:
        resp = self.admin.patch(
            f"{USERS_URL}/{self.target_id}", json={"password": "NewSecret99"}
        )
        self.assertEqual(resp.status_code, 200)
        stored = self.fetch_user(self.target_id).password_hash
        self.assertNotEqual(stored, "NewSecret99")
        client = self.new_client()
        self.assertEqual(self.login("target@example.com", "NewSecret99", client=client).status_code, 200)
        self.assertEqual(self.login("target@example.com", client=client).status_code, 400)

    def test_self_demotion_rejected_and_nothing_persisted(self) -> None:
        resp = self.admin.patch(
            f"{USERS_URL}/{self.admin_id}",
            json={"name": "Should Not Stick", "role": "USER"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": "You cannot demote yourself", "errorCode": 7001})
        user = self.fetch_user(self.admin_id)
        self.assertEqual(user.role, Role.ADMIN.value)
        self.assertEqual(user.name, "Test Person")

    def test_self_update_keeping_admin_role_is_allowed(self) -> None:
        resp = self.admin.patch(
            f"{USERS_URL}/{self.admin_id}", json={"name": "Still The Admin", "role": "ADMIN"}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["name"], "Still The Admin")

    def test_missing_user(self) -> None:
        resp = self.admin.patch(f"{USERS_URL}/9999", json={"name": "Nobody Here"})
        self.assertEqual(resp.status_code, 404)

    def test_invalid_payload(self) -> None:
        resp = self.admin.patch(
            f"{USERS_URL}/{self.target_id}", json={"role": "ROOT", "name": "abc"}
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["errorCode"], 5002)
        self.assertEqual({e["field"] for e in body["errors"]}, {"role", "name"})

    def test_email_is_stored_as_typed(self) -> None:
        resp = self.admin.patch(
            f"{USERS_URL}/{self.target_id}", json={"email": "  Target@Example.COM "}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["email"], "Target@Example.COM")
        client = self.new_client()
        self.assertEqual(self.login("Target@Example.COM", client=client).status_code, 200)

    def test_malformed_email_rejected(self) -> None:
        resp = self.admin.patch(f"{USERS_URL}/{self.target_id}", json={"email": "not-an-email"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual([e["field"] for e in resp.json()["errors"]], ["email"])

    def test_email_taken_by_other_user(self) -> None:
        resp = self.admin.patch(
            f"{USERS_URL}/{self.target_id}", json={"email": "admin@example.com"}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["errorCode"], 1002)


class TestAdminDelete(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_id, self.admin = self.login_as("admin@example.com", role=Role.ADMIN.value)
        self.target_id = self.create_user("target@example.com")

    def test_soft_delete_other_user(self) -> None:
        resp = self.admin.delete(f"{USERS_URL}/{self.target_id}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "User deleted")
        self.assertTrue(resp.json()["user"]["deleted"])
        self.assertTrue(self.fetch_user(self.target_id).deleted)
        self.assertEqual(self.login("target@example.com", client=self.new_client()).status_code, 404)

    def test_self_deletion_rejected(self) -> None:
        resp = self.admin.delete(f"{USERS_URL}/{self.admin_id}")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": "You cannot delete yourself", "errorCode": 7001})
        self.assertFalse(self.fetch_user(self.admin_id).deleted)

    def test_missing_user(self) -> None:
        self.assertEqual(self.admin.delete(f"{USERS_URL}/9999").status_code, 404)


class TestSelfProtectionService(DatabaseTestCase):
    """The guards fire inside the service, independent of the HTTP layer."""

    def setUp(self) -> None:
        super().setUp()
        self.admin_id = self.create_user("admin@example.com", role=Role.ADMIN.value)
        self.actor = AuthContext(
            user_id=self.admin_id, role=Role.ADMIN.value, token_id=1, token="t"
        )

    def test_update_self_demotion_raises_before_commit(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = MagicMock(id=self.admin_id)
        with self.assertRaises(BadRequestError) as ctx:
            update_user(db, self.actor, self.admin_id, UserUpdateRequest(role="USER"), MagicMock())
        self.assertEqual(ctx.exception.error_code, ErrorCode.SELF_DEMOTION)
        db.commit.assert_not_called()

    def test_delete_self_raises(self) -> None:
        with self.assertRaises(BadRequestError):
            soft_delete_user(self.db, self.actor, self.admin_id)
        self.assertFalse(self.fetch_user(self.admin_id).deleted)

    def test_other_admin_can_be_demoted(self) -> None:
        other_id = self.create_user("other@example.com", role=Role.ADMIN.value)
        user = update_user(
            self.db, self.actor, other_id, UserUpdateRequest(role="USER"), MagicMock()
        )
        self.assertEqual(user.role, Role.USER.value)


class TestLogoutService(unittest.TestCase):
    def test_missing_session_is_token_not_found(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = None
        context = AuthContext(user_id=1, role="USER", token_id=5, token="t")
        with self.assertRaises(NotFoundError) as ctx:
            auth_service.logout(db, context)
        self.assertEqual(ctx.exception.error_code, ErrorCode.TOKEN_NOT_FOUND)
        self.assertEqual(ctx.exception.message, "Token does not exists!")
        db.delete.assert_not_called()


if __name__ == "__main__":
    unittest.main()
