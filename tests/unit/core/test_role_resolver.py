from __future__ import annotations

import pytest

from dms_api.core.access import Caller, InvalidRoleState, Role, coerce_roles, resolve_effective_role


@pytest.mark.parametrize(
    ("names", "expected"),
    [
        (["employee"], Role.EMPLOYEE),
        (["manager"], Role.MANAGER),
        (["admin"], Role.ADMIN),
        (["employee", "manager"], Role.MANAGER),
        (["manager", "admin", "employee"], Role.ADMIN),
        ([Role.EMPLOYEE, "ADMIN"], Role.ADMIN),
    ],
)
def test_highest_priority_role_wins(names, expected) -> None:
    assert resolve_effective_role(names) is expected


@pytest.mark.parametrize("names", [[], ["auditor"], ["", "guest"]])
def test_no_recognised_role_is_a_configuration_error(names) -> None:
    with pytest.raises(InvalidRoleState):
        resolve_effective_role(names)


def test_coerce_roles_drops_unknown_names() -> None:
    assert coerce_roles(["Manager ", "auditor", "employee"]) == frozenset(
        {Role.MANAGER, Role.EMPLOYEE}
    )


def test_caller_role_is_derived_from_role_set() -> None:
    caller = Caller(id=1, department_id=1, roles=frozenset({Role.EMPLOYEE, Role.MANAGER}))
    assert caller.role is Role.MANAGER

    empty = Caller(id=2, department_id=1)
    with pytest.raises(InvalidRoleState):
        _ = empty.role
