# lis_core/common/permissions.py

from __future__ import annotations

from typing import Set

from rest_framework.permissions import BasePermission

from lis_core.common.errors import Forbidden

# Group/role names (Django auth Group names)
ROLE_ADMIN = "ADMIN"
ROLE_RECEPTION = "RECEPTION"
ROLE_LAB = "LAB"
ROLE_CASHIER = "CASHIER"
ROLE_ADMISSION = "ADMISSION"
ROLE_READONLY = "READONLY"

ROLE_GROUPS = [ROLE_ADMIN, ROLE_RECEPTION, ROLE_LAB, ROLE_CASHIER, ROLE_ADMISSION, ROLE_READONLY]

# Capabilities checked by the core operations
CAP_VIEW = "view"
CAP_MANAGE_PATIENTS = "manage_patients"
CAP_MANAGE_CATALOG = "manage_catalog"
CAP_MANAGE_ORDERS = "manage_orders"
CAP_CAPTURE_RESULTS = "capture_results"
CAP_VALIDATE_RESULTS = "validate_results"
CAP_RECORD_PAYMENTS = "record_payments"
CAP_SETTLE_ADMISSION = "settle_admission"

ALL_CAPABILITIES = {
    CAP_VIEW,
    CAP_MANAGE_PATIENTS,
    CAP_MANAGE_CATALOG,
    CAP_MANAGE_ORDERS,
    CAP_CAPTURE_RESULTS,
    CAP_VALIDATE_RESULTS,
    CAP_RECORD_PAYMENTS,
    CAP_SETTLE_ADMISSION,
}

ROLE_CAPABILITIES: dict[str, Set[str]] = {
    ROLE_ADMIN: ALL_CAPABILITIES,
    ROLE_RECEPTION: {CAP_VIEW, CAP_MANAGE_PATIENTS, CAP_MANAGE_ORDERS, CAP_RECORD_PAYMENTS},
    ROLE_LAB: {CAP_VIEW, CAP_MANAGE_ORDERS, CAP_CAPTURE_RESULTS, CAP_VALIDATE_RESULTS},
    ROLE_CASHIER: {CAP_VIEW, CAP_RECORD_PAYMENTS},
    ROLE_ADMISSION: {CAP_VIEW, CAP_MANAGE_PATIENTS, CAP_MANAGE_ORDERS, CAP_SETTLE_ADMISSION},
    ROLE_READONLY: {CAP_VIEW},
}


def _user_roles(user) -> Set[str]:
    """
    Resolve roles from Django groups (superusers count as ADMIN).

    Authenticated users without any group are treated as READONLY.
    """
    roles: Set[str] = set()

    if not user or not getattr(user, "is_authenticated", False):
        return roles

    if getattr(user, "is_superuser", False):
        roles.add(ROLE_ADMIN)
        return roles

    if hasattr(user, "groups"):
        roles.update(user.groups.values_list("name", flat=True))

    if not roles:
        roles.add(ROLE_READONLY)

    return roles


def user_capabilities(user) -> Set[str]:
    caps: Set[str] = set()
    for role in _user_roles(user):
        caps |= ROLE_CAPABILITIES.get(role, set())
    return caps


def has_capability(user, *capabilities: str) -> bool:
    """
    True when the user holds ANY of the given capabilities.
    """
    return bool(user_capabilities(user) & set(capabilities))


def require_capability(user, *capabilities: str) -> None:
    """
    Single authorization gate consumed by core operations.
    Raises Forbidden when the user holds none of the capabilities.
    """
    if not has_capability(user, *capabilities):
        raise Forbidden()


class CapabilityPermission(BasePermission):
    """
    View-level gate. Subclasses map view actions to the capabilities that unlock them;
    unknown actions are denied.
    """
    message = "You do not have permission to perform this action."

    required_capabilities_per_action: dict[str, Set[str]] = {
        "list": {CAP_VIEW},
        "retrieve": {CAP_VIEW},
    }

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        action = getattr(view, "action", None)
        if action is None:
            action = "list" if request.method == "GET" else "create"

        required = self.required_capabilities_per_action.get(action)
        if required is None:
            return False
        return has_capability(user, *required)


class CatalogPermission(CapabilityPermission):
    required_capabilities_per_action = {
        "list": {CAP_VIEW},
        "retrieve": {CAP_VIEW},
        "create": {CAP_MANAGE_CATALOG},
    }


class PatientPermission(CapabilityPermission):
    required_capabilities_per_action = {
        "list": {CAP_VIEW},
        "retrieve": {CAP_VIEW},
        "create": {CAP_MANAGE_PATIENTS},
        "next_code": {CAP_MANAGE_PATIENTS},
    }


class OrderPermission(CapabilityPermission):
    required_capabilities_per_action = {
        "list": {CAP_VIEW},
        "retrieve": {CAP_VIEW},
        "create": {CAP_MANAGE_ORDERS},
        "advance": {CAP_MANAGE_ORDERS, CAP_VALIDATE_RESULTS},
        "items": {CAP_MANAGE_ORDERS},
        "remove_item": {CAP_MANAGE_ORDERS},
        "result_draft": {CAP_CAPTURE_RESULTS},
        "payments": {CAP_VIEW},
        "pending_settlement": {CAP_SETTLE_ADMISSION, CAP_RECORD_PAYMENTS},
        # capability enforced by SettlementService.settle_batch
        "settle_batch": {CAP_VIEW},
    }
