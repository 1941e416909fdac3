from typing import Any

import httpx

from accrete.exceptions import RequestException
from accrete.logging import LoggerType, get_logger

__all__ = ("HttpPageClient",)


class HttpPageClient:
    """
    Page fetcher over an `httpx.AsyncClient`, usable directly as a paginator's `fetch_fn`.

    Each call issues `GET url?<page_param>=<page>&<limit_param>=<limit>` and returns the decoded JSON body.
    """

    def __init__(
        self,
        url: str,
        *,
        page_param: str = "page",
        limit_param: str = "limit",
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        logger: LoggerType | None = None,
    ) -> None:
        self.url = url
        self.page_param = page_param
        self.limit_param = limit_param
        self.params = params or {}
        self.headers = headers or {}
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None
        self._logger = logger or get_logger()

    async def __call__(self, page: int, limit: int) -> Any:
        params = self.params | {self.page_param: page, self.limit_param: limit}
        response = await self._client.get(self.url, params=params, headers=self.headers)
        if not response.is_success:
            self._logger.info("http-page", url=self.url, page=page, status="failed", status_code=response.status_code)
            raise RequestException(
                response.status_code,
                f"Request failed with status code: {response.status_code}",
                payload=_safe_json(response),
            )
        return response.json()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
