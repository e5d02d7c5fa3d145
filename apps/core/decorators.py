import logging
from functools import wraps

from django.http import Http404, HttpResponse

from apps.core.domain.exceptions import NotFound, RepositoryFailure, ValidationFailure

logger = logging.getLogger(__name__)


def domain_errors(view):
    """Tłumaczy wyjątki domeny na odpowiedzi HTTP (404 / 400 / 503)."""

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except NotFound as e:
            raise Http404(str(e)) from e
        except ValidationFailure as e:
            return HttpResponse(f"Error: {e}", status=400)
        except RepositoryFailure as e:
            logger.error("Repository failure in %s: %s (cause: %r)", view.__name__, e, e.cause)
            return HttpResponse("Storage is temporarily unavailable, please try again.", status=503)

    return wrapper
