"""Gateway middleware: request correlation and payload size guard.

``RequestIdMiddleware`` gives every incoming HTTP request an identifier.
The value comes from the ``X-Request-ID`` header when the client sends
one, otherwise a UUID4 is generated. The id is stored on
``request.request_id`` and in the ``REQUEST_ID_CTX`` context variable so
log records emitted anywhere downstream can carry it, and it is echoed
back in the ``X-Request-ID`` response header.

``ApiSizeLimitMiddleware`` rejects ``/api/`` requests whose declared body
exceeds ``API_MAX_BYTES`` with HTTP 413 before any view runs.
"""

import contextvars
import uuid

from django.conf import settings
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

REQUEST_ID_CTX = contextvars.ContextVar("request_id", default="-")


class RequestIdMiddleware(MiddlewareMixin):
    """Django middleware that sets and returns a per-request identifier.

    Attributes:
        HEADER (str): Incoming header name as found in ``request.META``.
        RESPONSE_HEADER (str): Header added to outgoing responses.
    """

    HEADER = "HTTP_X_REQUEST_ID"
    RESPONSE_HEADER = "X-Request-ID"

    def process_request(self, request):
        rid = request.META.get(self.HEADER) or str(uuid.uuid4())
        request.request_id = rid
        REQUEST_ID_CTX.set(rid)

    def process_response(self, request, response):
        """Attach the request id to the outgoing response."""
        rid = getattr(request, "request_id", REQUEST_ID_CTX.get())
        response[self.RESPONSE_HEADER] = rid
        return response


class ApiSizeLimitMiddleware(MiddlewareMixin):
    def process_request(self, request):
        if request.path.startswith("/api/"):
            clen = request.META.get("CONTENT_LENGTH")
            limit = getattr(settings, "API_MAX_BYTES", 1024 * 1024)
            if clen and clen.isdigit() and int(clen) > limit:
                return JsonResponse(
                    {
                        "success": False,
                        "error": {"code": "PAYLOAD_TOO_LARGE", "message": f"Request body exceeds {limit} bytes"},
                    },
                    status=413,
                )
