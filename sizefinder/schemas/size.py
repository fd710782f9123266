import math
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Canonical vocabulary; SIZE_ORDER is the subset that can be distance-matched.
SIZE_TOKENS: Tuple[str, ...] = ("XS", "S", "M", "L", "XL", "XXL", "XXXL")
SIZE_ORDER: Tuple[str, ...] = ("XS", "S", "M", "L", "XL", "XXL")


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def canonical_sizes(values: List[str]) -> List[str]:
    """Upper-case, drop anything outside SIZE_TOKENS and dedupe in order."""
    out: List[str] = []
    for v in values:
        token = str(v).strip().upper()
        if token in SIZE_TOKENS and token not in out:
            out.append(token)
    return out


class ChartEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    min: float
    max: float

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2

    def contains(self, value: float) -> bool:
        return self.min <= value < self.max


class SizeChart(BaseModel):
    """Ordered chest chart of half-open [min, max) intervals."""

    model_config = ConfigDict(frozen=True)

    entries: Tuple[ChartEntry, ...]

    @model_validator(mode="after")
    def _check_contiguous(self) -> "SizeChart":
        if not self.entries:
            raise ValueError("size chart needs at least one entry")
        labels = [e.label for e in self.entries]
        if len(set(labels)) != len(labels):
            raise ValueError("size chart labels must be unique")
        for entry in self.entries:
            if entry.min >= entry.max:
                raise ValueError(f"size chart entry {entry.label} has min >= max")
        for prev, nxt in zip(self.entries, self.entries[1:]):
            if prev.max != nxt.min:
                raise ValueError(f"size chart gap between {prev.label} and {nxt.label}")
        return self

    @classmethod
    def from_ranges(cls, ranges: Dict[str, Tuple[float, float]]) -> "SizeChart":
        return cls(entries=tuple(ChartEntry(label=k, min=lo, max=hi) for k, (lo, hi) in ranges.items()))

    @property
    def first(self) -> ChartEntry:
        return self.entries[0]

    @property
    def last(self) -> ChartEntry:
        return self.entries[-1]

    @property
    def labels(self) -> List[str]:
        return [e.label for e in self.entries]


GENERIC_SIZE_CHART = SizeChart.from_ranges({
    "XS": (30, 34),
    "S": (34, 37),
    "M": (37, 40),
    "L": (40, 43),
    "XL": (43, 46),
    "XXL": (46, 49),
})


class UserMeasurements(BaseModel):
    chest: Optional[float] = None
    shoulders: Optional[float] = None
    length: Optional[float] = None

    @field_validator("shoulders", "length")
    @classmethod
    def _drop_non_finite(cls, v: Optional[float]) -> Optional[float]:
        return _finite_or_none(v)


class ChartMeasurements(BaseModel):
    chest: Optional[float] = None
    shoulders: Optional[float] = None
    length: Optional[float] = None


class MeasurementsInfo(BaseModel):
    type: Literal["measurements"] = "measurements"
    data: ChartMeasurements


class _SizeListInfo(BaseModel):
    sizes: List[str] = Field(min_length=1)

    @field_validator("sizes", mode="before")
    @classmethod
    def _canonicalize(cls, v: List[str]) -> List[str]:
        return canonical_sizes(list(v or []))


class SizesInfo(_SizeListInfo):
    type: Literal["sizes"] = "sizes"


class OptionsInfo(_SizeListInfo):
    type: Literal["options"] = "options"


SizeInfo = Annotated[Union[MeasurementsInfo, SizesInfo, OptionsInfo], Field(discriminator="type")]

RecommendationSource = Literal["generic", "measurements", "sizes", "options"]


class Recommendation(BaseModel):
    size: str
    explanation: str
    source: RecommendationSource = "generic"


class FindSizeRequest(BaseModel):
    kind: Literal["FIND_SIZE"] = "FIND_SIZE"
    measurements: UserMeasurements
    html: Optional[str] = None
    url: Optional[str] = None

    @model_validator(mode="after")
    def _one_document_source(self) -> "FindSizeRequest":
        if bool(self.html) == bool(self.url):
            raise ValueError("provide exactly one of html or url")
        return self


class FindSizeResponse(BaseModel):
    size: str
    explanation: str
    source: RecommendationSource
    size_info: Optional[SizeInfo] = None


class FindSizeMessage(BaseModel):
    """Loose envelope for the FIND_SIZE message exchange."""

    type: str
    measurements: UserMeasurements = Field(default_factory=UserMeasurements)
    html: str = ""


class MessageResponse(BaseModel):
    size: Optional[str] = None
    explanation: str = ""
