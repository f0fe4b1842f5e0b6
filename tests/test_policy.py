"""Unit tests for the role/ownership decision."""

import unittest
from unittest.mock import patch

from todo_api.core.errors import AuthorizationError, InsufficientRoleError, NotOwnerError
from todo_api.schemas.auth import Identity
from todo_api.services.policy import Decision, DenyReason, Role, decide, enforce, roles_of

ALICE = Identity(id=1, username="alice", is_admin=False)
BOB = Identity(id=2, username="bob", is_admin=False)
ROOT = Identity(id=3, username="root", is_admin=True)


class TestRoles(unittest.TestCase):
    def test_admin_holds_both_roles(self) -> None:
        self.assertEqual(roles_of(ROOT), frozenset({Role.USER, Role.ADMIN}))

    def test_regular_user_holds_user_role(self) -> None:
        self.assertEqual(roles_of(ALICE), frozenset({Role.USER}))


class TestDecide(unittest.TestCase):
    """Role first, then ownership; admins bypass ownership."""

    def test_no_constraints_allows_any_identity(self) -> None:
        self.assertTrue(decide(ALICE).allowed)

    def test_admin_role_required(self) -> None:
        decision = decide(ALICE, required_role=Role.ADMIN)
        self.assertFalse(decision.allowed)
        self.assertEqual(decision.reason, DenyReason.INSUFFICIENT_ROLE)
        self.assertTrue(decide(ROOT, required_role=Role.ADMIN).allowed)

    def test_owner_allowed(self) -> None:
        self.assertTrue(decide(ALICE, resource_owner_id=ALICE.id).allowed)

    def test_non_owner_denied(self) -> None:
        decision = decide(ALICE, resource_owner_id=BOB.id)
        self.assertFalse(decision.allowed)
        self.assertEqual(decision.reason, DenyReason.NOT_OWNER)

    def test_admin_bypasses_ownership(self) -> None:
        self.assertTrue(decide(ROOT, resource_owner_id=ALICE.id).allowed)

    def test_role_checked_before_ownership(self) -> None:
        decision = decide(ALICE, required_role=Role.ADMIN, resource_owner_id=ALICE.id)
        self.assertEqual(decision.reason, DenyReason.INSUFFICIENT_ROLE)

    def test_decision_is_pure(self) -> None:
        first = decide(ALICE, resource_owner_id=BOB.id)
        second = decide(ALICE, resource_owner_id=BOB.id)
        self.assertEqual(first, second)


class TestEnforce(unittest.TestCase):
    def test_allowed_returns_none(self) -> None:
        self.assertIsNone(enforce(ROOT, required_role=Role.ADMIN))

    def test_insufficient_role_raises(self) -> None:
        with self.assertRaises(InsufficientRoleError) as ctx:
            enforce(ALICE, required_role=Role.ADMIN)
        self.assertEqual(ctx.exception.status_code, 403)

    def test_not_owner_raises(self) -> None:
        with self.assertRaises(NotOwnerError) as ctx:
            enforce(BOB, resource_owner_id=ALICE.id)
        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(
            ctx.exception.detail, "The user is not authorized to access this resource"
        )

    def test_denial_without_reason_is_still_forbidden(self) -> None:
        with patch("todo_api.services.policy.decide", return_value=Decision(allowed=False)):
            with self.assertRaises(AuthorizationError) as ctx:
                enforce(ROOT)
        self.assertEqual(ctx.exception.status_code, 403)


if __name__ == "__main__":
    unittest.main()
