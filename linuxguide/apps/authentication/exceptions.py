from rest_framework.exceptions import PermissionDenied


class InsufficientRole(PermissionDenied):
    default_detail = 'Your role does not allow this action.'
    default_code = 'insufficient_role'


class NotOwner(PermissionDenied):
    default_detail = 'You must be the owner of this content to modify it.'
    default_code = 'not_owner'
