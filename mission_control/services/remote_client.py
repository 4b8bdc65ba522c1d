from typing import Any, Dict, Optional

import httpx
import structlog

logger = structlog.get_logger()


class RemoteStatusClient:
    """
    Read-only JSON client for a remote integration.

    Every read returns either the decoded JSON payload or ``{"error": message}``.
    Nothing is raised past this boundary; callers treat the presence of the
    ``error`` key as the offline signal.
    """

    service_name = "Remote service"

    def __init__(
        self,
        base_url: str,
        token: Optional[str],
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token = token
        # Created on first request when not injected
        self._client = http_client

    @property
    def configured(self) -> bool:
        return bool(self._token)

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    def _not_configured(self) -> Dict[str, Any]:
        return {"error": f"{self.service_name} token not configured"}

    async def _get(self, path: str) -> Dict[str, Any]:
        if not self._token:
            return self._not_configured()

        url = f"{self.base_url}{path}"
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }
        try:
            response = await self._http().get(url, headers=headers)
            if not response.is_success:
                message = f"HTTP {response.status_code}"
                logger.error("remote_request_failed", service=self.service_name, url=url, error=message)
                return {"error": message}
            payload = response.json()
        except httpx.HTTPError as exc:
            message = str(exc) or exc.__class__.__name__
            logger.error("remote_request_failed", service=self.service_name, url=url, error=message)
            return {"error": message}
        except ValueError as exc:
            # Body was not JSON
            logger.error("remote_request_failed", service=self.service_name, url=url, error=str(exc))
            return {"error": f"Invalid JSON response: {exc}"}

        if not isinstance(payload, dict):
            return {"data": payload}
        return payload

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
