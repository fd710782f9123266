from typing import List
import structlog
from bs4 import Tag

from .document import is_select, option_texts, select_all, text_of
from .patterns import normalize_size_option


logger = structlog.get_logger("sizefinder")


SIZE_OPTION_SELECTORS: List[str] = [
    'select[name*="size" i]',
    '[class*="size-select" i]',
    '[class*="size-option" i]',
    '[data-variant-type="size"]',
]


def find_size_options(document: Tag) -> List[str]:
    """Collect canonical size tokens from size pickers (dropdowns, buttons, swatches)."""
    sizes: List[str] = []

    def _add(text: str) -> None:
        size = normalize_size_option(text)
        if size and size not in sizes:
            sizes.append(size)

    for element in select_all(document, SIZE_OPTION_SELECTORS):
        if is_select(element):
            for text in option_texts(element):
                _add(text)
        else:
            _add(text_of(element))

    if sizes:
        logger.debug("size_options_found", sizes=sizes)
    return sizes
