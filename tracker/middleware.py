"""
Request logging middleware for the API routes.
"""
import logging

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """
    Logs method, path, response status and the authenticated user id for
    every ``/api/`` request. DRF copies the user it authenticated onto the
    underlying request, so the id is read after the view has run.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        if request.path.startswith('/api/'):
            user = getattr(request, 'user', None)
            user_id = user.pk if user is not None and user.is_authenticated else None
            logger.info(
                f"{request.method} {request.path} -> {response.status_code} "
                f"user_id={user_id}"
            )

        return response
