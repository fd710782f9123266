import httpx
import structlog

from ..config import settings
from ..errors import PageFetchError


logger = structlog.get_logger("sizefinder")


class PageClient:
    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = settings.page_fetch_timeout if timeout is None else timeout

    def _headers(self) -> dict:
        return {
            "User-Agent": settings.page_user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        }

    async def fetch_html(self, url: str) -> str:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                resp = await client.get(url, headers=self._headers())
                resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("page_fetch_failed", url=url, error=str(e))
            raise PageFetchError(url, str(e)) from e

        logger.info("page_fetched", url=url, status=resp.status_code, content_length=len(resp.text))
        return resp.text
