import asyncio
import json
import logging
import time
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
)

import httpx
from pydantic import ValidationError

from .auth import authorization_header, resolve_credentials
from .errors import (
    ZendeskClientError,
    ZendeskConfigError,
    ZendeskHTTPError,
    ZendeskParseError,
)
from .models import ErrorBody
from .observability import log_event
from .pagination import first_array_key, next_page, resolve_page_size
from .query import with_query
from .rate_limit import RateLimitState


class ZendeskClient:
    """
    Shared HTTP client for the Zendesk Support REST API (v2).
    - Handles auth, base URL, rate-limit pre-flight waits, error normalization
    - Pagination across cursor, link and legacy continuation styles
    - Returns raw dict payloads; tools own reshaping
    """

    def __init__(
        self,
        subdomain: str,
        *,
        email: Optional[str] = None,
        api_token: Optional[str] = None,
        oauth_token: Optional[str] = None,
        timeout_seconds: float = 30.0,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        subdomain = (subdomain or "").strip()
        if not subdomain:
            raise ZendeskConfigError("subdomain must be provided.")

        self.credentials = resolve_credentials(
            email=email, api_token=api_token, oauth_token=oauth_token
        )
        self._subdomain = subdomain
        self._base_url = f"https://{subdomain}.zendesk.com/api/v2"
        self._auth_header = authorization_header(self.credentials)
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("zendesk_mcp.client")

        self._clock = clock
        self._sleep = sleep
        self.rate_limit = RateLimitState(now=clock())

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout_seconds)

    @property
    def subdomain(self) -> str:
        return self._subdomain

    @property
    def base_url(self) -> str:
        return self._base_url

    def rate_limit_status(self) -> Dict[str, float]:
        return self.rate_limit.snapshot()

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "ZendeskClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _build_url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}{path}"

    async def _wait_for_rate_limit(self, endpoint: str) -> None:
        # Single deferred wait; the state is not re-checked after waking.
        wait = self.rate_limit.wait_seconds(self._clock())
        if wait <= 0:
            return
        log_event(
            "rate_limit_wait",
            logger=self.log,
            endpoint=endpoint,
            wait_ms=int(wait * 1000),
            rate_limit_remaining=self.rate_limit.remaining,
        )
        await self._sleep(wait)

    async def request(
        self,
        path: str,
        method: str = "GET",
        *,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Core request method.
        - Waits once before sending when the last known quota is nearly spent
        - Raises ZendeskHTTPError on non-2xx HTTP responses (never retried)
        - Raises ZendeskClientError on network/timeout errors
        - Raises ZendeskParseError if a 2xx body isn't a JSON object
        - Returns {} for 204 and empty bodies
        """
        method = method.upper()
        url = self._build_url(path)

        await self._wait_for_rate_limit(path)

        merged_headers = {
            "Authorization": self._auth_header,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if headers:
            merged_headers.update(headers)

        start = time.perf_counter()
        try:
            resp = await self.http.request(
                method, url, headers=merged_headers, content=body
            )
        except httpx.HTTPError as exc:
            log_event(
                "zendesk_call",
                logger=self.log,
                method=method,
                endpoint=path,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            raise ZendeskClientError(
                f"Network error calling {method} {url}: {exc}"
            ) from exc

        self.rate_limit.update_from_headers(resp.headers)

        log_event(
            "zendesk_call",
            logger=self.log,
            method=method,
            endpoint=path,
            status=resp.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
            rate_limit_remaining=self.rate_limit.remaining,
        )

        if resp.status_code < 200 or resp.status_code >= 300:
            raise self._to_http_error(resp, method=method, url=url)

        if resp.status_code == 204:
            return {}

        return self._safe_json(resp, method=method, url=url)

    def _safe_json(
        self, resp: httpx.Response, *, method: str, url: str
    ) -> Dict[str, Any]:
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise ZendeskParseError(
                f"Expected JSON from {method} {url}, "
                f"got non-JSON body snippet: {snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise ZendeskParseError(
                f"Expected top-level JSON object from {method} {url}, "
                f"got {type(data).__name__}"
            )
        return data

    def _to_http_error(
        self, resp: httpx.Response, *, method: str, url: str
    ) -> ZendeskHTTPError:
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        message = f"{resp.status_code} {resp.reason_phrase}".strip()

        # The body only feeds the message; a bad body never hides the failure.
        try:
            parsed = resp.json()
        except ValueError:
            parsed = None
            response_text = (resp.text or "")[:500]

        if isinstance(parsed, dict):
            response_json = parsed
            try:
                message = ErrorBody.model_validate(parsed).to_message() or message
            except ValidationError:
                pass

        return ZendeskHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=message,
            response_json=response_json,
            response_text=response_text,
        )

    # --- Verb wrappers ----------------------------------------------------- #

    async def get(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        return await self.request(with_query(path, params), "GET")

    async def post(self, path: str, data: Any = None) -> Dict[str, Any]:
        return await self.request(path, "POST", body=_dump_body(data))

    async def put(self, path: str, data: Any = None) -> Dict[str, Any]:
        return await self.request(path, "PUT", body=_dump_body(data))

    async def patch(self, path: str, data: Any = None) -> Dict[str, Any]:
        return await self.request(path, "PATCH", body=_dump_body(data))

    async def delete(self, path: str) -> Dict[str, Any]:
        return await self.request(path, "DELETE")

    # --- Pagination -------------------------------------------------------- #

    async def paginate(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        resource_key: Optional[str] = None,
    ) -> AsyncIterator[Any]:
        """
        Lazily yield items across every page of a list endpoint.

        The resource key defaults to the first array-valued key of each page.
        A missing or empty array ends the sequence. Each call starts from the
        first page; the iterator is forward-only.
        """
        base_params: Dict[str, Any] = dict(params or {})
        page_size = resolve_page_size(base_params)
        current_path = path
        current_params: Dict[str, Any] = {**base_params, "page_size": page_size}

        while True:
            payload = await self.get(current_path, current_params)

            key = resource_key or first_array_key(payload)
            if not key:
                return
            items = payload.get(key)
            if not isinstance(items, list) or not items:
                return

            for item in items:
                yield item

            step = next_page(payload, base_params, page_size, path=current_path)
            if step is None:
                return
            next_path, current_params = step
            if next_path is not None:
                current_path = next_path

    async def paginate_all(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        resource_key: Optional[str] = None,
    ) -> List[Any]:
        return [item async for item in self.paginate(path, params, resource_key)]


def _dump_body(data: Any) -> Optional[str]:
    if data is None:
        return None
    return json.dumps(data)


__all__ = [
    "ZendeskClient",
    "ZendeskClientError",
    "ZendeskConfigError",
    "ZendeskHTTPError",
    "ZendeskParseError",
]
