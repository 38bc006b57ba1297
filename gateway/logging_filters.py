"""Logging filter that stamps records with the current request id.

Attach ``RequestIdFilter`` to a handler and every record it emits gets a
``request_id`` attribute, so JSON log lines from the use case, the
adapters and the views can be correlated per HTTP request.
"""

from logging import Filter, LogRecord

from .middleware import REQUEST_ID_CTX


class RequestIdFilter(Filter):
    """Fill ``record.request_id`` from ``REQUEST_ID_CTX``.

    Records that already carry a ``request_id`` (passed through ``extra=``)
    keep it. Outside a request the context default ("-") is used.
    """

    def filter(self, record: LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = REQUEST_ID_CTX.get()
        return True
