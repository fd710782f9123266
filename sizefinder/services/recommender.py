import math
from typing import List, Optional
import structlog

from ..errors import InvalidMeasurement
from ..schemas.size import (
    GENERIC_SIZE_CHART,
    SIZE_ORDER,
    MeasurementsInfo,
    OptionsInfo,
    Recommendation,
    SizeChart,
    SizeInfo,
    SizesInfo,
    UserMeasurements,
)


logger = structlog.get_logger("sizefinder")


GENERIC_EXPLANATION = "Based on generic size chart (chest measurement)."
APPROXIMATE_EXPLANATION = "Based on generic size chart. This is an approximate recommendation."
CHART_EXPLANATION = "Based on chest measurements from the size chart."


def _require_chest(measurements: UserMeasurements) -> float:
    chest = measurements.chest
    if chest is None or math.isnan(chest) or math.isinf(chest) or chest <= 0:
        raise InvalidMeasurement("chest", chest)
    return float(chest)


def recommend_generic_size(measurements: UserMeasurements, chart: SizeChart = GENERIC_SIZE_CHART) -> Recommendation:
    chest = _require_chest(measurements)
    for entry in chart.entries:
        if entry.contains(chest):
            return Recommendation(size=entry.label, explanation=GENERIC_EXPLANATION)

    # Outside every interval: clamp to the nearest end of the chart
    size = chart.first.label if chest <= chart.first.min else chart.last.label
    return Recommendation(size=size, explanation=APPROXIMATE_EXPLANATION)


def _nearest_midpoint(chest: float, chart: SizeChart) -> str:
    best_size = chart.first.label
    smallest_diff = float("inf")
    for entry in chart.entries:
        diff = abs(chest - entry.midpoint)
        if diff < smallest_diff:
            smallest_diff = diff
            best_size = entry.label
    return best_size


def _closest_available(ideal: str, available: List[str]) -> str:
    # Only sizes in SIZE_ORDER have a position; XXXL and friends are never distance-matched.
    candidates = [s for s in SIZE_ORDER if s in available]
    if ideal not in SIZE_ORDER or not candidates:
        return available[0]

    ideal_index = SIZE_ORDER.index(ideal)
    closest = candidates[0]
    smallest_diff = len(SIZE_ORDER)
    for size in candidates:
        diff = abs(SIZE_ORDER.index(size) - ideal_index)
        if diff < smallest_diff:
            smallest_diff = diff
            closest = size
    return closest


class Recommender:
    def __init__(self, chart: SizeChart = GENERIC_SIZE_CHART) -> None:
        self.chart = chart

    def recommend(self, measurements: UserMeasurements, size_info: Optional[SizeInfo]) -> Recommendation:
        if size_info is None:
            result = recommend_generic_size(measurements, self.chart)
        elif isinstance(size_info, MeasurementsInfo):
            result = self._from_chart(measurements, size_info)
        elif isinstance(size_info, (SizesInfo, OptionsInfo)):
            result = self._from_size_list(measurements, size_info.sizes)
            result.source = size_info.type
        else:
            raise TypeError(f"Unsupported size information: {type(size_info).__name__}")

        logger.info(
            "recommendation_made",
            size=result.size,
            source=result.source,
            variant=size_info.type if size_info is not None else None,
        )
        return result

    def _from_chart(self, measurements: UserMeasurements, info: MeasurementsInfo) -> Recommendation:
        # Shoulders and length are extracted but do not influence the pick
        if not info.data.chest:
            return recommend_generic_size(measurements, self.chart)
        chest = _require_chest(measurements)
        return Recommendation(
            size=_nearest_midpoint(chest, self.chart),
            explanation=CHART_EXPLANATION,
            source="measurements",
        )

    def _from_size_list(self, measurements: UserMeasurements, available: List[str]) -> Recommendation:
        generic = recommend_generic_size(measurements, self.chart)
        if generic.size in available:
            return Recommendation(size=generic.size, explanation=f"{generic.explanation} This size is available.")

        closest = _closest_available(generic.size, available)
        return Recommendation(
            size=closest,
            explanation=(
                f"Based on your measurements, we recommend {generic.size}, but it's not available. "
                f"{closest} is the closest available size."
            ),
        )
