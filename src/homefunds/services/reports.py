"""Chart rendering for the spending breakdown and the monthly history."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from ..constants.categories import get_category_by_id  # noqa: E402
from .aggregation import ZERO, BreakdownEntry, SeriesPoint  # noqa: E402
from .formatting import format_currency  # noqa: E402

EXPENSE_COLOR = "#EF4444"
INCOME_COLOR = "#10B981"


class ReportRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def build_spending_chart(breakdown: Sequence[BreakdownEntry], *, title: str = "Spending by Category") -> Figure:
    """Donut chart of a category breakdown, coloured with each category's color.

    The breakdown is expected sorted largest first, as returned by
    :func:`homefunds.services.aggregation.category_breakdown`.
    """

    fig, ax = plt.subplots(figsize=(10, 7))
    grand_total = sum((entry.total for entry in breakdown), ZERO)

    if breakdown and grand_total > 0:
        infos = [get_category_by_id(entry.key) for entry in breakdown]
        sizes = [float(entry.total) for entry in breakdown]

        wedges, _texts, autotexts = ax.pie(
            sizes,
            labels=None,  # legend carries the names
            autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
            wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
            startangle=90,
            colors=[info.color for info in infos],
            pctdistance=0.78,
        )
        for autotext in autotexts:
            autotext.set_fontsize(9)
            autotext.set_fontweight("bold")
            autotext.set_color("white")

        ax.text(0, 0.08, "Total Spending", ha="center", va="center", fontsize=11, color="#666")
        ax.text(
            0, -0.08, format_currency(grand_total, decimals=0),
            ha="center", va="center", fontsize=18, fontweight="bold", color="#1F2937",
        )

        legend_labels = [
            f"{info.name}: {format_currency(entry.total)} ({entry.percent:.1f}%)"
            for info, entry in zip(infos, breakdown)
        ]
        ax.legend(
            wedges,
            legend_labels,
            title="Categories",
            title_fontsize=11,
            loc="center left",
            bbox_to_anchor=(1.02, 0.5),
            fontsize=9,
            framealpha=0.9,
        )
        ax.axis("equal")
        ax.set_title(title, fontsize=16, fontweight="bold", pad=20)
    else:
        ax.text(0.5, 0.5, "No expense data", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    fig.tight_layout()
    return fig


def build_history_chart(series: Sequence[SeriesPoint], *, title: str = "Expenses vs Incomes") -> Figure:
    """Grouped bar chart of monthly expenses and incomes, oldest month on the left."""

    fig, ax = plt.subplots(figsize=(10, 5))
    if not series:
        ax.text(0.5, 0.5, "No history yet", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")
        fig.tight_layout()
        return fig

    positions = range(len(series))
    width = 0.38
    ax.bar(
        [p - width / 2 for p in positions],
        [float(point.expenses) for point in series],
        width=width,
        color=EXPENSE_COLOR,
        label="Expenses",
    )
    ax.bar(
        [p + width / 2 for p in positions],
        [float(point.incomes) for point in series],
        width=width,
        color=INCOME_COLOR,
        label="Incomes",
    )
    ax.set_xticks(list(positions))
    ax.set_xticklabels([point.label for point in series])
    ax.yaxis.set_major_formatter(lambda value, _pos: format_currency(value, decimals=0))
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(loc="upper left", frameon=False)
    ax.set_title(title, fontsize=14, fontweight="bold")
    fig.tight_layout()
    return fig


def export_chart_png(
    figure: Figure,
    *,
    output_path: Path,
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render ``figure`` to PNG, close it and return the path."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if renderer is not None:
        renderer.render(figure, output_path=output_path)
    else:
        figure.savefig(output_path, bbox_inches="tight", dpi=120)
    plt.close(figure)
    return output_path


__all__ = [
    "ReportRenderer",
    "build_history_chart",
    "build_spending_chart",
    "export_chart_png",
]
