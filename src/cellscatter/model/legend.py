"""Rows of the count/percent legend."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from cellscatter.config import PERCENT_DECIMALS
from cellscatter.model.context import PlotContext


@dataclass(frozen=True)
class LegendRow:
    label: str
    color: Optional[str]  # None for the "Total" aggregate
    count: int
    percent: float  # 0..100, rounded


def format_percent(fraction: float, decimals: int = PERCENT_DECIMALS) -> float:
    """Fraction (0..1) as a percentage rounded to `decimals` places, halves up."""
    factor = 10 ** (decimals + 2)
    return math.floor(fraction * factor + 0.5) / 10 ** decimals


def legend_rows(context: PlotContext) -> list[LegendRow]:
    dataset = context.dataset
    rows: list[LegendRow] = []
    for label, count, fraction in zip(
        dataset.categories, dataset.category_counts, dataset.category_percents
    ):
        rows.append(
            LegendRow(
                label=label,
                color=context.colors.get(label),
                count=count,
                percent=format_percent(fraction),
            )
        )
    return rows
