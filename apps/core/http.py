"""
JSON request/response helpers shared by the API views.

Includes:
- api_view: authentication, allowed methods, exception to status mapping
- parse_json_body: decode a request body into a dict
- json_error / validation_error_response: error bodies
- get_or_not_found: single-row lookup with a 404-ready message
"""

import json
import logging
from functools import wraps

from django.core.exceptions import ValidationError, ObjectDoesNotExist
from django.db import DatabaseError
from django.http import JsonResponse, Http404
from django.views.decorators.http import require_http_methods
from django_htmx.http import trigger_client_event

logger = logging.getLogger(__name__)

# Client event telling an htmx front end to discard optimistic state
REFETCH_EVENT = 'refetch'


def json_error(message, status, **extra):
    """Return a JSON error body: {"error": message, ...extra}."""
    body = {'error': message}
    body.update(extra)
    return JsonResponse(body, status=status)


def validation_error_response(error):
    """Render a ValidationError as a 400 response."""
    extra = {}
    if hasattr(error, 'error_dict'):
        extra['details'] = error.message_dict
    return json_error('; '.join(error.messages), 400, **extra)


def api_view(*methods):
    """
    Decorator for JSON API views.

    - 405 for methods not listed
    - 401 for anonymous users
    - ValidationError -> 400
    - DoesNotExist / Http404 -> 404
    - DatabaseError -> 500 (logged); htmx callers also receive a
      'refetch' client event so they reload authoritative state

    Usage:
        @api_view('GET', 'POST')
        def project_collection(request): ...
    """
    def decorator(view_func):
        @require_http_methods(list(methods))
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return json_error('Unauthorized', 401)

            try:
                return view_func(request, *args, **kwargs)
            except ValidationError as e:
                return validation_error_response(e)
            except (ObjectDoesNotExist, Http404) as e:
                return json_error(str(e) or 'Not found', 404)
            except DatabaseError:
                logger.exception('Database error in %s', view_func.__name__)
                response = json_error('Failed to save changes', 500)
                if request.htmx:
                    trigger_client_event(response, REFETCH_EVENT)
                return response

        return _wrapped
    return decorator


def parse_json_body(request):
    """
    Decode the request body as a JSON object.

    An empty body is treated as {}.

    Raises:
        ValidationError: If the body is not valid JSON or not an object
    """
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except ValueError:
        raise ValidationError('Malformed JSON body.')

    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object.')

    return payload


def isoformat_or_none(value):
    return value.isoformat() if value else None


def get_or_not_found(queryset, label, **lookup):
    """
    Fetch one row, raising DoesNotExist with a readable message.

    Usage:
        task = get_or_not_found(Task.objects, 'Task', pk=task_id)
    """
    try:
        return queryset.get(**lookup)
    except queryset.model.DoesNotExist:
        raise queryset.model.DoesNotExist(f'{label} not found')
