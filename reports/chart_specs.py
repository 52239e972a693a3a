"""
Chart payloads - maps the story onto one chart description per target.
Library-neutral: type, label axis, datasets and axis options only.
"""

from typing import Any, Dict, List, Optional

from hedge_analytics.derivations import series_color


class ChartSpecError(Exception):
    """Raised when a story is missing a view needed for a chart."""
    pass


class ChartRegistry:
    """
    At most one live chart payload per target.

    Registering a target again replaces the payload and hands the previous
    one back to the caller for release.
    """

    def __init__(self):
        self._charts: Dict[str, Dict[str, Any]] = {}

    def register(self, target: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        previous = self._charts.pop(target, None)
        self._charts[target] = payload
        return previous

    def release(self, target: str) -> Optional[Dict[str, Any]]:
        return self._charts.pop(target, None)

    def get(self, target: str) -> Optional[Dict[str, Any]]:
        return self._charts.get(target)

    def targets(self) -> List[str]:
        return list(self._charts)

    def as_dict(self) -> Dict[str, Dict[str, Any]]:
        return dict(self._charts)

    def __len__(self) -> int:
        return len(self._charts)


def _legend_bottom(**extra) -> Dict[str, Any]:
    options = {'plugins': {'legend': {'position': 'bottom'}}}
    options.update(extra)
    return options


def _y_title(text: str) -> Dict[str, Any]:
    return {'y': {'title': {'display': True, 'text': text}}}


def _curve_datasets(curves: List[Dict[str, Any]], tension: float) -> List[Dict[str, Any]]:
    # Per-series label axes are dropped; the chart uses the shared axis
    return [
        {
            'label': curve['label'],
            'data': list(curve['data']),
            'borderColor': curve['color'],
            'tension': tension,
            'fill': False,
        }
        for curve in curves
    ]


def shared_label_axis(curves: List[Dict[str, Any]]) -> List[str]:
    """Label axis for a multi-series chart: the first series' labels, or none."""
    if not curves:
        return []
    return list(curves[0].get('labels', []))


def line_chart(curves: List[Dict[str, Any]], tension: float, y_title: Optional[str] = None) -> Dict[str, Any]:
    """Line chart over several curves sharing the first curve's label axis."""
    options = _legend_bottom(scales=_y_title(y_title)) if y_title else _legend_bottom()
    return {
        'type': 'line',
        'labels': shared_label_axis(curves),
        'datasets': _curve_datasets(curves, tension),
        'options': options,
    }


def build_chart_specs(
    story: Dict[str, Any],
    palette: Optional[List[str]] = None,
    registry: Optional[ChartRegistry] = None
) -> Dict[str, Dict[str, Any]]:
    """
    Build every chart payload for a story.

    Args:
        story: Output of build_story()
        palette: Colors for single-series charts
        registry: Registry to fill (a fresh one when omitted)

    Returns:
        Dictionary mapping chart target to payload

    Raises:
        ChartSpecError: If the story lacks a required view
    """
    required = {'monthly', 'histogram', 'correlation', 'equity_curves', 'beta',
                'sensitivity', 'stress', 'drawdown'}
    missing = required - set(story)
    if missing:
        raise ChartSpecError(f"Story missing views: {sorted(missing)}")

    registry = registry if registry is not None else ChartRegistry()
    monthly = story['monthly']

    registry.register('heatmap', {
        'type': 'bar',
        'labels': list(monthly['months']),
        'datasets': [
            {'label': ds['label'], 'data': list(ds['data']), 'backgroundColor': ds['color']}
            for ds in monthly['datasets']
        ],
        'options': _legend_bottom(scales={'y': {
            'tickSuffix': '%',
            'title': {'display': True, 'text': 'Avg monthly return (%)'},
        }}),
    })

    registry.register('boxplot', {
        'type': 'line',
        'labels': list(monthly['months']),
        'datasets': [
            {
                'label': ds['label'],
                'data': list(ds['data']),
                'borderColor': series_color(index, palette),
                'backgroundColor': series_color(index, palette),
                'fill': False,
                'tension': 0.1,
            }
            for index, ds in enumerate(monthly['datasets'])
        ],
        'options': _legend_bottom(),
    })

    histogram = story['histogram']
    registry.register('histogram', {
        'type': 'bar',
        'labels': list(histogram['labels']),
        'datasets': [{'label': 'Frequency', 'data': list(histogram['bins']),
                      'backgroundColor': series_color(0, palette)}],
        'options': {'scales': {
            'x': {'title': {'display': True, 'text': 'Return bucket'}},
            'y': {'title': {'display': True, 'text': 'Count'}},
        }},
    })

    correlation = story['correlation']
    registry.register('correlation', {
        'type': 'line',
        'labels': list(correlation['labels']),
        'datasets': [{'label': 'Rolling correlation', 'data': list(correlation['values']),
                      'borderColor': series_color(1, palette), 'tension': 0.2}],
        'options': {'scales': {'y': {'min': 0, 'max': 1}}},
    })

    # Equity curves feed two targets
    registry.register('equity', line_chart(story['equity_curves'], tension=0.2))
    registry.register('static-dynamic-chart', line_chart(story['equity_curves'], tension=0.2))

    beta = story['beta']
    registry.register('beta', {
        'type': 'line',
        'labels': list(beta['labels']),
        'datasets': [{'label': 'Rolling Beta', 'data': list(beta['values']),
                      'borderColor': series_color(2, palette), 'fill': False, 'tension': 0.15}],
        'options': {'scales': _y_title('Beta')},
    })

    registry.register('sensitivity-chart', line_chart(story['sensitivity'], tension=0.1, y_title='Equity'))

    for suffix, curves in story['stress'].items():
        registry.register(f"stress-{suffix.lower()}", line_chart(curves, tension=0, y_title='Index level'))

    drawdown = story['drawdown']
    registry.register('drawdown', {
        'type': 'line',
        'labels': list(drawdown['labels']),
        'datasets': [{'label': 'Drawdown', 'data': list(drawdown['values']),
                      'borderColor': series_color(3, palette), 'fill': False}],
        'options': _legend_bottom(scales=_y_title('Return')),
    })

    return registry.as_dict()
