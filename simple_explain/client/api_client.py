"""HTTP client for the generation endpoints."""

from typing import Any

import httpx

from simple_explain.exceptions import GenerationRequestError
from simple_explain.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 90.0


class GenerateApiClient:
    """Calls ``POST /api/generate`` and ``POST /api/generate/essay``.

    Responses are returned undecoded beyond JSON: callers validate the
    ``lesson`` or ``essay`` field before trusting it.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
        api_prefix: str = "/api",
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.api_prefix = api_prefix

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.api_prefix}{path}"
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(url, json=body)
        except httpx.HTTPError as e:
            logger.warning("Generation request failed", url=url, error=str(e))
            raise GenerationRequestError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            logger.warning(
                "Generation request returned an error status",
                url=url,
                status_code=response.status_code,
            )
            raise GenerationRequestError(
                f"API request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationRequestError("API response is not JSON") from e
        return data if isinstance(data, dict) else {}

    async def generate_lesson(self, topic: str, lang: str) -> Any:
        """Return the raw ``lesson`` field of a successful response."""
        data = await self._post("/generate", {"topic": topic, "lang": lang})
        return data.get("lesson")

    async def generate_essay(self, topic: str, lang: str, level: str) -> Any:
        """Return the raw ``essay`` field of a successful response."""
        data = await self._post(
            "/generate/essay", {"topic": topic, "lang": lang, "level": level}
        )
        return data.get("essay")
