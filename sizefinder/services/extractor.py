from typing import Optional
from bs4 import Tag

from ..schemas.size import ChartMeasurements, MeasurementsInfo, SizeInfo, SizesInfo
from .document import text_of
from .patterns import MEASUREMENT_KEYWORDS, find_measurement, find_size_tokens


def extract_size_information(element: Optional[Tag]) -> Optional[SizeInfo]:
    """
    Classify a page region as a measurement chart or a plain size list.

    Measurements win over size tokens; one resolved measurement is enough.
    """
    if element is None:
        return None

    # Cells like <td>S</td><td>M</td> must not run together into "SM"
    text = text_of(element, " ")

    values = {name: find_measurement(text, keywords) for name, keywords in MEASUREMENT_KEYWORDS.items()}
    if any(v is not None for v in values.values()):
        return MeasurementsInfo(data=ChartMeasurements(**values))

    tokens = find_size_tokens(text)
    if tokens:
        return SizesInfo(sizes=tokens)

    return None
