import hashlib
import time
from typing import Dict, Optional, Tuple

from ..config import settings
from ..schemas.size import (
    FindSizeMessage,
    MessageResponse,
    Recommendation,
    SizeInfo,
    UserMeasurements,
)
from .document import parse_document
from .locator import SizeInfoLocator
from .recommender import Recommender


NOT_FOUND_MESSAGE = "Could not find size information on this page."


class SizeFinder:
    """Runs discovery then recommendation for one page snapshot."""

    def __init__(
        self,
        locator: SizeInfoLocator | None = None,
        recommender: Recommender | None = None,
        cache_ttl: int | None = None,
    ) -> None:
        self.locator = locator or SizeInfoLocator()
        self.recommender = recommender or Recommender()
        self.cache_ttl = settings.cache_ttl_seconds if cache_ttl is None else cache_ttl
        # document hash -> (expiry, located size info)
        self._cache: Dict[str, Tuple[float, Optional[SizeInfo]]] = {}

    def _cache_key(self, html: str) -> str:
        return hashlib.md5(html.encode("utf-8")).hexdigest()

    def _cache_get(self, key: str, now: float) -> Tuple[bool, Optional[SizeInfo]]:
        hit = self._cache.get(key)
        if hit is None:
            return False, None
        if hit[0] > now:
            return True, hit[1]
        self._cache.pop(key, None)
        return False, None

    def _cache_set(self, key: str, info: Optional[SizeInfo], now: float) -> None:
        expired = [k for k, (exp, _) in self._cache.items() if exp <= now]
        for k in expired:
            self._cache.pop(k, None)
        self._cache[key] = (now + self.cache_ttl, info)

    def locate(self, html: str) -> Optional[SizeInfo]:
        key = self._cache_key(html)
        now = time.time()
        found, info = self._cache_get(key, now)
        if found:
            return info

        info = self.locator.find(parse_document(html))
        if self.cache_ttl > 0:
            self._cache_set(key, info, now)
        return info

    def find_size(self, html: str, measurements: UserMeasurements) -> Tuple[Recommendation, Optional[SizeInfo]]:
        info = self.locate(html)
        return self.recommender.recommend(measurements, info), info

    def handle_message(self, message: FindSizeMessage) -> MessageResponse:
        """Request/response adapter for FIND_SIZE messages; other types get a not-found reply."""
        if message.type != "FIND_SIZE":
            return MessageResponse(size=None, explanation=NOT_FOUND_MESSAGE)
        recommendation, _ = self.find_size(message.html, message.measurements)
        return MessageResponse(size=recommendation.size, explanation=recommendation.explanation)
