"""Text for the county detail panel and the hover tooltip."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

from .data import Entity

PLACEHOLDER_TITLE = "Select a county"
PLACEHOLDER_TEXT = "Click a county on the map or a point in a scatterplot to see its details."


@dataclass(frozen=True)
class DetailField:
    label: str
    value: str
    info: str


@dataclass(frozen=True)
class DetailRecord:
    title: str
    fields: List[DetailField] = field(default_factory=list)
    placeholder: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.fields


def _pct(v: float) -> str:
    return f"{v:.1f}%" if math.isfinite(v) else "N/A"


def _grouped(v: float) -> str:
    return f"{v:,.0f}" if math.isfinite(v) else "N/A"


def present_details(entity: Optional[Entity]) -> DetailRecord:
    """Project an entity into the fixed, ordered list of labeled fields."""
    if entity is None:
        return DetailRecord(title=PLACEHOLDER_TITLE, placeholder=PLACEHOLDER_TEXT)

    needs = f"{entity.needs_index:.2f}/10" if entity.needs_index is not None else "N/A"
    income = _grouped(entity.median_income)
    if income != "N/A":
        income = "$" + income

    return DetailRecord(
        title=f"{entity.name} County",
        fields=[
            DetailField("Needs index", needs,
                        "Custom composite score (0-10) combining income, education, depression, "
                        "and poverty rates. Higher values indicate greater need."),
            DetailField("Depression (age-adjusted)", _pct(entity.depression_adj),
                        "Percentage of adults with depression, adjusted for age distribution to "
                        "allow fair comparison across counties."),
            DetailField("Depression (crude)", _pct(entity.depression_crude),
                        "Raw percentage of adults with depression, not adjusted for age "
                        "differences between counties."),
            DetailField("Total population", _grouped(entity.total_population),
                        "Total number of residents in the county."),
            DetailField("Median income", income,
                        "Middle value of household income, where half of households earn more "
                        "and half earn less."),
            DetailField("Poverty rate", _pct(entity.poverty_rate),
                        "Percentage of population living below the federal poverty threshold."),
            DetailField("Bachelor's degree or higher", _pct(entity.ba_plus_pct),
                        "Percentage of adults (25+) who have completed at least a bachelor's "
                        "degree."),
        ],
    )


def tooltip_lines(entity: Entity) -> List[str]:
    return [
        f"{entity.name} County",
        f"Depression (age-adjusted): {_pct(entity.depression_adj)}",
        f"Depression (crude): {_pct(entity.depression_crude)}",
    ]
