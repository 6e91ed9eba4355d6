"""
Authorization for every mutating endpoint.

Guides, posts, comments and users are all guarded by the same decision:

1. role gate: when the endpoint declares a set of roles, the actor's role
   must be in it (``InsufficientRole`` otherwise);
2. super_admin override: a super_admin who passed the gate may act on any
   record;
3. ownership: anyone else may only act on records they own (``NotOwner``
   otherwise).

Authentication is a precondition and is checked before any of this by DRF's
``IsAuthenticated`` family, so an anonymous actor never reaches these checks.

Views declare their role gates per HTTP method::

    required_roles = {'POST': ADMIN_ROLES, 'DELETE': ADMIN_ROLES}

Methods absent from the mapping have no role gate.
"""
import logging

from collections import namedtuple

from rest_framework.permissions import SAFE_METHODS, BasePermission

from .exceptions import InsufficientRole, NotOwner
from .models import Role

logger = logging.getLogger(__name__)

ADMIN_ROLES = frozenset({Role.ADMIN.value, Role.SUPER_ADMIN.value})
SUPER_ADMIN_ONLY = frozenset({Role.SUPER_ADMIN.value})

Decision = namedtuple('Decision', ('allowed', 'reason'))

ALLOW = Decision(True, None)


def deny(reason):
    return Decision(False, reason)


def has_required_role(actor, required_roles):
    """The role gate on its own. An empty or missing role set lets anyone in."""
    if not required_roles:
        return True

    return str(getattr(actor, 'role', None)) in required_roles


def can_mutate(actor, record, required_roles=None):
    """
    Decide whether `actor` may update or delete `record`.

    `record` is anything with an `owner_id`. The decision is recomputed on
    every call from the actor's and the record's current state.
    """
    if not has_required_role(actor, required_roles):
        return deny(InsufficientRole)

    if actor.role == Role.SUPER_ADMIN:
        return ALLOW

    if actor.pk == record.owner_id:
        return ALLOW

    return deny(NotOwner)


def required_roles_for(request, view):
    return getattr(view, 'required_roles', {}).get(request.method)


class HasRequiredRole(BasePermission):
    """
    View-level role gate, for endpoints that have no target record to check
    ownership against (create, list).
    """

    def has_permission(self, request, view):
        if has_required_role(request.user, required_roles_for(request, view)):
            return True

        logger.warning(
            'User %s with role %s denied %s %s: insufficient role',
            request.user.pk, getattr(request.user, 'role', None),
            request.method, request.path,
        )
        raise InsufficientRole()


class IsOwnerOrSuperAdmin(BasePermission):
    """
    Object-level permission that allows write operations only when
    `can_mutate` does. Safe methods are always allowed here; visibility of
    unpublished content is handled by the view's queryset.
    """

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True

        decision = can_mutate(
            request.user, obj, required_roles_for(request, view)
        )

        if decision.allowed:
            return True

        logger.warning(
            'User %s denied %s on %s %s: %s',
            request.user.pk, request.method,
            obj._meta.model_name, obj.pk, decision.reason.default_code,
        )
        raise decision.reason()
