"""Tests for the role and ownership gates."""

from datetime import datetime, timedelta

import pytest
import pytz

from core.authorization import (
    POLICY,
    Operation,
    authorize,
    authorize_resource,
    require_ownership,
    require_role,
)
from core.credentials import Credential
from core.exceptions import ForbiddenError, UnauthenticatedError

TEACHER_ID = "aaaaaaaaaaaaaaaaaaaaaaaa"
OTHER_ID = "bbbbbbbbbbbbbbbbbbbbbbbb"


def make_credential(role: str, subject_id: str = TEACHER_ID) -> Credential:
    now = datetime.now(pytz.utc)
    return Credential(
        subject_id=subject_id,
        username=f"user-{role}",
        role=role,
        issued_at=now,
        expires_at=now + timedelta(hours=1),
    )


class TestGates:
    def test_require_role_passes_on_match(self):
        require_role(make_credential("teacher"), "teacher")

    def test_require_role_rejects_other_role(self):
        with pytest.raises(ForbiddenError):
            require_role(make_credential("student"), "teacher")

    def test_require_ownership_passes_for_owner(self):
        require_ownership(make_credential("teacher"), TEACHER_ID)

    def test_require_ownership_rejects_non_owner(self):
        with pytest.raises(ForbiddenError):
            require_ownership(make_credential("teacher", OTHER_ID), TEACHER_ID)


class TestPolicyTable:
    def test_every_operation_has_a_policy(self):
        assert set(POLICY) == set(Operation)

    @pytest.mark.parametrize("operation", [Operation.REGISTER_USER, Operation.LOGIN])
    def test_open_operations_need_no_identity(self, operation):
        authorize(operation, None)

    @pytest.mark.parametrize(
        "operation",
        [op for op, policy in POLICY.items() if policy.requires_identity],
    )
    def test_missing_identity_is_unauthenticated(self, operation):
        with pytest.raises(UnauthenticatedError):
            authorize(operation, None)

    @pytest.mark.parametrize(
        "operation",
        [
            Operation.LIST_COURSES,
            Operation.READ_COURSE,
            Operation.ENROLL_COURSE,
            Operation.DROP_COURSE,
        ],
    )
    def test_students_may_read_and_enroll(self, operation):
        student = make_credential("student", OTHER_ID)

        authorize(operation, student)
        authorize_resource(operation, student, TEACHER_ID)

    @pytest.mark.parametrize(
        "operation",
        [Operation.CREATE_COURSE, Operation.UPDATE_COURSE, Operation.DELETE_COURSE],
    )
    def test_students_may_not_manage_courses(self, operation):
        with pytest.raises(ForbiddenError):
            authorize(operation, make_credential("student"))

    def test_teacher_may_create(self):
        authorize(Operation.CREATE_COURSE, make_credential("teacher"))

    @pytest.mark.parametrize("operation", [Operation.UPDATE_COURSE, Operation.DELETE_COURSE])
    def test_owner_teacher_may_modify(self, operation):
        teacher = make_credential("teacher")

        authorize(operation, teacher)
        authorize_resource(operation, teacher, TEACHER_ID)

    @pytest.mark.parametrize("operation", [Operation.UPDATE_COURSE, Operation.DELETE_COURSE])
    def test_non_owner_teacher_is_forbidden(self, operation):
        teacher = make_credential("teacher", OTHER_ID)

        authorize(operation, teacher)
        with pytest.raises(ForbiddenError):
            authorize_resource(operation, teacher, TEACHER_ID)
