"""Tests for the decision engine."""

from collections.abc import Mapping

import pytest

from authz.models.document import ResourceType
from authz.models.principal import Role
from authz.policies.base_policy import Operation
from authz.policies.engine import DecisionEngine, evaluate
from authz.policies.matrix import build_config
from tests.conftest import DEPT_2, ORG_A, ORG_B

pytestmark = pytest.mark.unit

TASK_FIELDS = {"tasks": ["createdBy", "assignees", "watchers"]}


@pytest.fixture
def scoped_engine():
    """Engine with tiers expressed in the same tokens as the resource gates."""
    config = build_config(
        {
            "SuperAdmin": {
                "ownDept": ["read", "update", "delete"],
                "crossDept": ["read"],
                "resources": {"tasks": ["create", "read", "update", "delete", "restore"], "users": ["read"]},
            },
            "Admin": {
                "own": ["delete"],
                "ownDept": ["update"],
                "crossDept": ["read", "delete"],
                "resources": {"tasks": ["create", "read", "update", "delete"]},
            },
            "Manager": {
                "own": ["delete"],
                "ownDept": ["read", "update"],
                "crossDept": ["read"],
                "resources": {"tasks": ["create", "read", "update", "delete"], "users": ["read"]},
            },
            "User": {
                "own": ["read", "update"],
                "ownDept": ["read"],
                "resources": {"tasks": ["create", "read", "update"], "users": ["read"]},
            },
        },
        ownership_fields=TASK_FIELDS,
        version="test",
    )
    return DecisionEngine(config)


class TestScenarios:
    """Reference scenarios for instance-level decisions."""

    def test_manager_updates_department_task_without_owning_it(self, scoped_engine, manager, make_task):
        task = make_task(createdBy="someone-else", assignees=["user-2"])
        assert scoped_engine.evaluate(manager, "tasks", "update", task) is True

    def test_manager_cannot_update_other_department_task(self, scoped_engine, manager, make_task):
        assert scoped_engine.evaluate(manager, "tasks", "update", make_task(department=DEPT_2)) is False

    @pytest.mark.parametrize("operation", ["create", "read", "update", "delete", "restore", "write"])
    def test_user_denied_everything_in_foreign_organization(self, scoped_engine, user, make_task, operation):
        task = make_task(organization=ORG_B, createdBy="user-1", assignees=["user-1"])
        assert scoped_engine.evaluate(user, "tasks", operation, task) is False

    @pytest.mark.parametrize("operation", ["create", "read", "update", "delete", "restore"])
    def test_platform_superadmin_crosses_organizations(
        self, scoped_engine, platform_superadmin, make_task, operation
    ):
        task = make_task(organization=ORG_B, department=DEPT_2)
        assert scoped_engine.evaluate(platform_superadmin, "tasks", operation, task) is True

    def test_own_tier_on_unregistered_resource_type(self, scoped_engine, user):
        profile = {"_id": "user-1", "organization": ORG_A, "department": "dept-1", "createdBy": "user-1"}
        assert scoped_engine.evaluate(user, "users", "read", profile) is False


class TestSharedMatrixDecisions:
    """Decisions under the matrix file shipped with the package."""

    def test_user_reads_assigned_task(self, engine, user, make_task):
        assert engine.evaluate(user, "tasks", "read", make_task(assignees=[{"_id": "user-1"}])) is True

    def test_own_read_shadows_department_read(self, engine, user, make_task):
        assert engine.evaluate(user, "tasks", "read", make_task()) is False

    def test_update_matches_no_tier(self, engine, user, make_task):
        # "update" appears in gates only; tiers use "write"
        assert engine.evaluate(user, "tasks", "update", make_task(department=DEPT_2)) is True

    def test_unregistered_type_with_own_read(self, engine, user):
        assert engine.evaluate(user, "users", "read", {"_id": "user-2", "organization": ORG_A}) is False

    def test_notification_recipient(self, engine, user):
        notification = {"organization": ORG_A, "recipients": ["user-1", "user-2"]}
        assert engine.evaluate(user, "notifications", "read", notification) is True
        assert engine.evaluate(user, "notifications", "read", {**notification, "recipients": []}) is False

    def test_gate_applies_before_document(self, engine, user, make_task):
        task = make_task(createdBy="user-1")
        assert engine.evaluate(user, "tasks", "delete", task) is False
        assert engine.evaluate(user, "tasks", "delete") is False


class TestTypeLevel:
    """Without a document only the gate is consulted."""

    @pytest.mark.parametrize(
        "role, resource, operation, expected",
        [
            (Role.USER, "tasks", "create", True),
            (Role.USER, "tasks", "delete", False),
            (Role.MANAGER, "materials", "update", True),
            (Role.MANAGER, "materials", "delete", False),
            (Role.ADMIN, "users", "restore", False),
            (Role.SUPER_ADMIN, "users", "restore", True),
            (Role.SUPER_ADMIN, "notifications", "create", False),
            (Role.USER, "invoices", "read", False),
        ],
    )
    def test_type_level(self, engine, make_principal, role, resource, operation, expected):
        assert engine.evaluate(make_principal(role), resource, operation) is expected

    def test_enum_arguments(self, engine, user):
        assert engine.evaluate(user, ResourceType.TASKS, Operation.CREATE) is True
        assert engine.evaluate(user, ResourceType.VENDORS, Operation.UPDATE) is False


class TestOrganizationBoundary:
    """Only the platform superadmin crosses organizations."""

    @pytest.mark.parametrize("role", [Role.SUPER_ADMIN, Role.ADMIN, Role.MANAGER, Role.USER])
    @pytest.mark.parametrize("operation", ["read", "update"])
    def test_foreign_organization_denied(self, engine, make_principal, make_task, role, operation):
        principal = make_principal(role, id="owner-1")
        task = make_task(organization=ORG_B, createdBy="owner-1")
        assert engine.evaluate(principal, "tasks", operation, task) is False

    def test_customer_superadmin_stays_in_tenant(self, scoped_engine, customer_superadmin, make_task):
        assert scoped_engine.evaluate(customer_superadmin, "tasks", "read", make_task()) is True
        assert scoped_engine.evaluate(customer_superadmin, "tasks", "read", make_task(organization=ORG_B)) is False

    def test_document_without_organization(self, scoped_engine, manager, make_task):
        assert scoped_engine.evaluate(manager, "tasks", "read", make_task(organization=None)) is False

    def test_platform_superadmin_still_gated(self, engine, platform_superadmin):
        notification = {"organization": ORG_B}
        assert engine.evaluate(platform_superadmin, "notifications", "create", notification) is False
        assert engine.evaluate(platform_superadmin, "notifications", "delete", notification) is True

    def test_platform_flag_without_superadmin_role(self, scoped_engine, make_principal, make_task):
        manager = make_principal(Role.MANAGER, is_platform_user=True)
        assert scoped_engine.evaluate(manager, "tasks", "read", make_task(organization=ORG_B)) is False


class TestTierShadowing:
    """The first matching tier governs; later tiers are never consulted."""

    def test_own_beats_cross_department(self, scoped_engine, admin, make_task):
        foreign_dept = make_task(department=DEPT_2)
        assert scoped_engine.evaluate(admin, "tasks", "delete", foreign_dept) is False
        assert scoped_engine.evaluate(admin, "tasks", "delete", make_task(createdBy="admin-1")) is True

    def test_own_beats_same_department(self, scoped_engine, user, make_task):
        assert scoped_engine.evaluate(user, "tasks", "read", make_task()) is False
        assert scoped_engine.evaluate(user, "tasks", "read", make_task(watchers=["user-1"])) is True

    def test_cross_department(self, scoped_engine, admin, make_task):
        assert scoped_engine.evaluate(admin, "tasks", "read", make_task(department=DEPT_2)) is True

    def test_no_tier_allows_within_organization(self, scoped_engine, user, make_task):
        assert scoped_engine.evaluate(user, "tasks", "create", make_task(department=DEPT_2)) is True

    def test_principal_without_department(self, scoped_engine, make_principal, make_task):
        manager = make_principal(Role.MANAGER, department=None)
        assert scoped_engine.evaluate(manager, "tasks", "update", make_task()) is False


class TestReferenceEquivalence:
    """Bare and expanded references decide identically."""

    @pytest.mark.parametrize(
        "bare, expanded",
        [
            ({"createdBy": "user-1"}, {"createdBy": {"_id": "user-1", "firstName": "Ada"}}),
            ({"assignees": ["user-2", "user-1"]}, {"assignees": [{"_id": "user-2"}, {"_id": "user-1"}]}),
            ({"watchers": ["user-2"]}, {"watchers": [{"_id": "user-2"}]}),
            ({"organization": ORG_A}, {"organization": {"_id": ORG_A, "name": "Acme"}}),
        ],
    )
    def test_equivalent_forms(self, scoped_engine, user, make_task, bare, expanded):
        for operation in ("read", "update", "create"):
            assert scoped_engine.evaluate(user, "tasks", operation, make_task(**bare)) == scoped_engine.evaluate(
                user, "tasks", operation, make_task(**expanded)
            )


class TestIndeterminateInput:
    """Anything the engine cannot interpret is denied without raising."""

    def test_missing_principal(self, engine, make_task):
        assert engine.evaluate(None, "tasks", "read") is False
        assert engine.evaluate(None, "tasks", "read", make_task()) is False

    def test_unknown_role(self, engine, make_principal, make_task):
        auditor = make_principal("Auditor")
        assert engine.evaluate(auditor, "tasks", "read") is False
        assert engine.evaluate(auditor, "tasks", "read", make_task()) is False

    def test_unknown_role_is_logged(self, engine, make_principal, caplog):
        with caplog.at_level("WARNING", logger="authz.policies.engine"):
            assert engine.evaluate(make_principal("Auditor"), "tasks", "read") is False
        assert "Role not found in authorization matrix: Auditor" in caplog.text

    @pytest.mark.parametrize("flag", [1, "1", "true", "yes", "on", "True"])
    def test_non_boolean_platform_flag(self, engine, flag):
        raw = {"_id": "u9", "role": "SuperAdmin", "organization": ORG_A, "isPlatformUser": flag}
        assert engine.evaluate(raw, "tasks", "delete", {"organization": ORG_B}) is False
        assert engine.evaluate(raw, "tasks", "delete") is False

    @pytest.mark.parametrize("flag", [1, "yes"])
    def test_non_boolean_head_of_department_flag(self, engine, flag):
        raw = {"_id": "u9", "role": "Manager", "organization": ORG_A, "isHod": flag}
        assert engine.evaluate(raw, "tasks", "read") is False

    def test_numeric_identifiers_of_mixed_types(self, engine, make_principal):
        principal = make_principal(Role.ADMIN, organization=1)
        assert engine.evaluate(principal, "tasks", "update", {"organization": 1.0}) is True
        assert engine.evaluate(principal, "tasks", "update", {"organization": 1.5}) is False

    @pytest.mark.parametrize("principal", [{"role": "User"}, {"_id": "u1"}, "user-1", 42, object()])
    def test_unusable_principal(self, engine, principal):
        assert engine.evaluate(principal, "tasks", "read") is False

    def test_raw_principal_mapping(self, engine, make_task):
        raw = {"_id": "user-1", "role": "User", "organization": {"_id": ORG_A}, "department": "dept-1"}
        assert engine.evaluate(raw, "tasks", "read", make_task(createdBy={"_id": "user-1"})) is True

    @pytest.mark.parametrize("operation", [None, "", 42, "approve"])
    def test_unknown_operation(self, engine, user, operation):
        assert engine.evaluate(user, "tasks", operation) is False

    @pytest.mark.parametrize("resource_type", [None, "", "invoices", 3])
    def test_unknown_resource_type(self, engine, customer_superadmin, resource_type):
        assert engine.evaluate(customer_superadmin, resource_type, "read") is False

    @pytest.mark.parametrize("document", ["task-1", 17, ["task-1"]])
    def test_malformed_document(self, engine, user, document):
        assert engine.evaluate(user, "tasks", "update", document) is False

    def test_platform_override_precedes_document_checks(self, engine, platform_superadmin):
        assert engine.evaluate(platform_superadmin, "tasks", "read", "task-1") is True

    def test_unexpected_error_is_denied(self, engine, user, caplog):
        class Exploding(Mapping):
            def __getitem__(self, key):
                raise RuntimeError("boom")

            def __iter__(self):
                return iter(())

            def __len__(self):
                return 0

        with caplog.at_level("ERROR", logger="authz.policies.engine"):
            assert engine.evaluate(user, "tasks", "update", Exploding()) is False
        assert "Authorization evaluation failed" in caplog.text


class TestEngineProperties:
    """Idempotence and binding."""

    def test_idempotent(self, engine, manager, make_task):
        task = make_task(assignees=["manager-1"])
        results = {engine.evaluate(manager, "tasks", "read", task) for _ in range(5)}
        assert len(results) == 1

    def test_document_is_not_mutated(self, engine, user, make_task):
        task = make_task(assignees=[{"_id": "user-1"}])
        snapshot = {**task, "assignees": [dict(a) for a in task["assignees"]]}
        engine.evaluate(user, "tasks", "read", task)
        assert task == snapshot

    def test_functional_form(self, default_config, user):
        assert evaluate(default_config, user, "tasks", "create") is True
        assert evaluate(default_config, user, "tasks", "delete") is False

    def test_from_store(self, matrix_store, user):
        engine = DecisionEngine.from_store(matrix_store)
        assert engine.config is matrix_store.current
        assert engine.allowed_operations(user.role, "tasks") == {"create", "read", "update"}
