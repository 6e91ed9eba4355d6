import logging

from django.db import DatabaseError, IntegrityError

from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class UniquenessViolation(APIException):
    status_code = 400
    default_detail = 'A record with these values already exists.'
    default_code = 'uniqueness_violation'


class StorageFailure(APIException):
    status_code = 500
    default_detail = 'The server could not complete this request.'
    default_code = 'storage_failure'


def core_exception_handler(exc, context):
    # Storage errors never reach the client as-is. Constraint violations are
    # the client's to correct; anything else is logged and reported as a
    # generic failure.
    if isinstance(exc, IntegrityError):
        logger.warning('Integrity violation in %s: %s', _view_name(context), exc)
        exc = UniquenessViolation()
    elif isinstance(exc, DatabaseError):
        logger.error(
            'Storage failure in %s', _view_name(context), exc_info=exc
        )
        exc = StorageFailure()

    # If an exception is thrown that we don't explicitly handle here, we want
    # to delegate to the default exception handler offered by DRF. If we do
    # handle this exception type, we will still want access to the response
    # generated by DRF, so we get that response up front.
    response = exception_handler(exc, context)

    if response is None:
        return None

    handlers = {
        'NotFound': _handle_not_found_error,
    }
    # This is how we identify the type of the current exception. We will use
    # this in a moment to see whether we should handle this exception or let
    # DRF do its thing.
    exception_class = exc.__class__.__name__

    if exception_class in handlers:
        return handlers[exception_class](exc, context, response)

    return _handle_generic_error(exc, context, response)


def _view_name(context):
    view = context.get('view', None)
    return view.__class__.__name__ if view is not None else 'unknown view'


def _handle_generic_error(exc, context, response):
    # This is about the most straightforward exception handler we can create.
    # We take the response generated by DRF and wrap it in the `errors` key.
    response.data = {
        'errors': response.data
    }

    return response


def _handle_not_found_error(exc, context, response):
    view = context.get('view', None)

    # A NotFound raised with its own key (e.g. the missing parent of a
    # comment) keeps it.
    if isinstance(exc.detail, dict):
        return _handle_generic_error(exc, context, response)

    if view and hasattr(view, 'queryset') and view.queryset is not None:
        error_key = view.queryset.model._meta.verbose_name

        response.data = {
            'errors': {
                error_key: response.data['detail']
            }
        }

    else:
        response = _handle_generic_error(exc, context, response)

    return response
