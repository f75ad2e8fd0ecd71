import hmac
import ipaddress
import logging
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger("mockprep.internal")


def _is_loopback(request: Request) -> bool:
    host = request.client.host if request.client else ""
    if host == "localhost":
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


class InternalGuardMiddleware(BaseHTTPMiddleware):
    """Collaborator routes (question generation, feedback scoring) need the shared key.

    An unset key keeps the routes closed to remote callers; loopback callers pass
    only when ``allow_localhost`` is on.
    """

    def __init__(
        self,
        app,
        *,
        api_key: str,
        allow_localhost: bool = True,
        protected_prefixes: Iterable[str] = ("/internal",),
        header_name: str = "x-internal-api-key",
    ) -> None:
        super().__init__(app)
        self._api_key = (api_key or "").strip()
        self._allow_localhost = allow_localhost
        self._protected_prefixes = tuple(protected_prefixes)
        self._header_name = header_name.lower()

    def _key_matches(self, request: Request) -> bool:
        supplied = request.headers.get(self._header_name, "").strip()
        return bool(self._api_key) and hmac.compare_digest(supplied.encode(), self._api_key.encode())

    async def dispatch(self, request: Request, call_next):
        path = request.url.path or "/"
        if not path.startswith(self._protected_prefixes):
            return await call_next(request)

        if self._key_matches(request) or (self._allow_localhost and _is_loopback(request)):
            return await call_next(request)

        logger.warning(
            "internal_access_denied",
            extra={"path": path, "client": request.client.host if request.client else None},
        )
        return JSONResponse({"detail": "Forbidden", "code": "forbidden"}, status_code=403)
