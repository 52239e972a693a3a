"""
KPI cards - Markdown rendering of per-strategy KPIs.
"""

from typing import Any, Dict, List

from reports.formatters import format_kpi_value


def render_kpi_card(kpi: Dict[str, Any]) -> str:
    """Render one strategy's KPI card."""
    return "\n".join([
        f"#### {kpi['strategy']}",
        "",
        f"- **CAGR:** {format_kpi_value(kpi.get('cagr'))}",
        f"- **Volatility:** {format_kpi_value(kpi.get('vol'))}",
        f"- **Max DD:** {format_kpi_value(kpi.get('max_drawdown'))}",
    ])


def render_kpi_cards(kpis: List[Dict[str, Any]]) -> str:
    """
    Render every KPI card as one Markdown document.

    Args:
        kpis: Output of strategy_kpis()

    Returns:
        Markdown text; a placeholder line when there are no strategies
    """
    sections = ["## Strategy KPIs"]

    if not kpis:
        sections.append("*No strategies in the data set.*")
    else:
        sections.extend(render_kpi_card(kpi) for kpi in kpis)

    return "\n\n".join(sections) + "\n"
