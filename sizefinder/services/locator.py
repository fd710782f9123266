from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple
import structlog
from bs4 import Tag

from ..schemas.size import OptionsInfo, SizeInfo
from .document import contains_table, parent_of, select_all, text_of
from .extractor import extract_size_information
from .options import find_size_options
from .patterns import MEASUREMENT_KEYWORDS


logger = structlog.get_logger("sizefinder")


SIZING_PHRASES: List[str] = [
    "size chart",
    "size guide",
    "measurements",
    "dimensions",
    "fit guide",
    "sizing info",
    "size information",
]

CANDIDATE_SELECTORS: List[str] = [
    "table",
    '[class*="size"]:not(select):not(option)',
    '[id*="size"]:not(select):not(option)',
    "button",
    "a",
    ".product-info",
    ".product-details",
    ".product-description",
]

# Walk-up stops once a container holds a table or more text than this
MAX_ANCESTOR_STEPS = 3
MIN_CONTAINER_TEXT = 100

# Weights for ranking seeds (higher = more likely a real size chart)
SCORING_RULES: Dict[str, float] = {
    "table": 3.0,
    "sizing_attribute": 2.0,
    "phrase": 1.0,
    "measurement_keyword": 1.0,
}

_ALL_KEYWORDS: Tuple[str, ...] = tuple(k for group in MEASUREMENT_KEYWORDS.values() for k in group)


class RankedCandidate(NamedTuple):
    score: float
    position: int
    seed: Tag
    container: Tag
    details: Dict[str, float]


def _has_sizing_attribute(element: Tag) -> bool:
    classes = element.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    ident = element.get("id") or ""
    return "size" in " ".join(classes).lower() or "size" in str(ident).lower()


def _expand_container(seed: Tag) -> Tag:
    container = seed
    for _ in range(MAX_ANCESTOR_STEPS):
        if contains_table(container) or len(text_of(container)) > MIN_CONTAINER_TEXT:
            break
        parent = parent_of(container)
        if parent is None:
            break
        container = parent
    return container


class SizeInfoLocator:
    """Finds the page region most likely to hold sizing information."""

    def __init__(
        self,
        phrases: Sequence[str] = tuple(SIZING_PHRASES),
        weights: Dict[str, float] | None = None,
    ) -> None:
        self.phrases = [p.lower() for p in phrases]
        self.weights = dict(SCORING_RULES if weights is None else weights)

    def _score(self, seed: Tag, container: Tag, phrase_hits: int) -> Tuple[float, Dict[str, float]]:
        details: Dict[str, float] = {}
        if container.name == "table" or contains_table(container):
            details["table"] = self.weights.get("table", 0.0)
        if _has_sizing_attribute(seed):
            details["sizing_attribute"] = self.weights.get("sizing_attribute", 0.0)
        details["phrase"] = phrase_hits * self.weights.get("phrase", 0.0)
        container_text = text_of(container).lower()
        if any(k in container_text for k in _ALL_KEYWORDS):
            details["measurement_keyword"] = self.weights.get("measurement_keyword", 0.0)
        return sum(details.values()), details

    def rank(self, document: Tag) -> List[RankedCandidate]:
        """Seeds carrying a sizing phrase, best first; ties keep document selector order."""
        ranked: List[RankedCandidate] = []
        for position, element in enumerate(select_all(document, CANDIDATE_SELECTORS)):
            text = text_of(element).lower()
            hits = sum(1 for p in self.phrases if p in text)
            if not hits:
                continue
            container = _expand_container(element)
            score, details = self._score(element, container, hits)
            ranked.append(RankedCandidate(score, position, element, container, details))
        ranked.sort(key=lambda c: (-c.score, c.position))
        return ranked

    def find(self, document: Tag) -> Optional[SizeInfo]:
        ranked = self.rank(document)
        for candidate in ranked:
            info = extract_size_information(candidate.container)
            if info is not None:
                logger.info(
                    "size_info_located",
                    variant=info.type,
                    seeds=len(ranked),
                    score=candidate.score,
                    rules=candidate.details,
                    container=candidate.container.name,
                )
                return info

        sizes = find_size_options(document)
        if sizes:
            logger.info("size_info_fallback_options", seeds=len(ranked), sizes=sizes)
            return OptionsInfo(sizes=sizes)

        logger.info("size_info_not_found", seeds=len(ranked))
        return None


def find_size_information(document: Tag) -> Optional[SizeInfo]:
    return SizeInfoLocator().find(document)
