"""Dash application callbacks."""
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from dash import Input, Output, ctx, html, no_update

from src.app.controller import DashboardController, Notice
from src.app.runner import BackgroundLoop
from src.constants import NOTICE_COLORS
from src.data import Coin, coins_to_frame, filter_coins, frame_to_records, sort_frame
from src.utils import setup_logger

logger = setup_logger(__name__)

# Extra time the callback waits beyond the controller's own deadline
RUNNER_GRACE = 5.0


def register_callbacks(app, controller: DashboardController, runner: BackgroundLoop) -> None:
    """
    Register all Dash callbacks with the app.

    Args:
        app: Dash application instance
        controller: DashboardController holding the table state
        runner: BackgroundLoop the controller's coroutines run on
    """

    @app.callback(
        Output("coin-table", "data"),
        Output("status-line", "children"),
        Output("mock-banner", "children"),
        Output("notice", "children"),
        Output("auto-refresh", "interval"),
        Input("refresh-btn", "n_clicks"),
        Input("auto-refresh", "n_intervals"),
        Input("search", "value"),
        Input("coin-table", "sort_by"),
    )
    def update_table(n_clicks, n_intervals, search, sort_by):
        """Refresh, filter and sort the market table."""
        return handle_update(controller, runner, ctx.triggered_id, search, sort_by)


def handle_update(
    controller: DashboardController,
    runner,
    trigger: Optional[str],
    search: Optional[str],
    sort_by: Optional[List[Dict]],
) -> Tuple:
    """
    Apply one UI event to the controller and render every output.

    The search text and sort order belong to the requesting client and are
    never written to the shared controller. Only the request whose refresh
    ran receives that refresh's notice; search and sort events leave the
    client's notice as it is.
    """
    notice = no_update
    if trigger == "refresh-btn":
        logger.info("Manual refresh triggered")
        ran = runner.run(controller.refresh(force=True, show_notice=True), timeout=controller.deadline + RUNNER_GRACE)
        notice = render_notice(controller.take_notice() if ran else None)
    elif trigger in (None, "auto-refresh"):
        logger.info("Auto refresh triggered" if trigger else "Initial data load")
        ran = runner.run(controller.refresh(force=False, show_notice=False), timeout=controller.deadline + RUNNER_GRACE)
        notice = render_notice(controller.take_notice() if ran else None)

    coins = controller.coins
    return (
        render_table(coins, search, sort_by),
        render_status(coins, search, controller.last_updated),
        render_banner(controller),
        notice,
        controller.refresh_interval * 1000,
    )


def render_table(coins: List[Coin], search: Optional[str], sort_by: Optional[List[Dict]]) -> List[Dict]:
    df = coins_to_frame(filter_coins(coins, search))
    return frame_to_records(sort_frame(df, sort_by))


def render_status(coins: List[Coin], search: Optional[str], last_updated: Optional[datetime]) -> List:
    query = (search or "").strip()
    shown = len(filter_coins(coins, query))
    total = len(coins)
    if shown == 0:
        summary = "No cryptocurrencies found"
    elif query:
        summary = f"Showing {shown} of {total} cryptocurrencies matching '{query}'"
    else:
        summary = f"Showing {total} cryptocurrencies"

    children = [html.Span(summary)]
    if last_updated is not None:
        children.append(html.Span(f"Last updated: {last_updated.strftime('%I:%M:%S %p')}"))
    return children


def render_banner(controller: DashboardController) -> Optional[html.Div]:
    """Sample-data warning, or a persistent error hint after repeated failures."""
    if controller.is_using_mock_data:
        return html.Div(
            "⚠️ Using sample data. Live API data is currently unavailable.",
            style={
                "padding": "12px 16px",
                "backgroundColor": "#fff8e1",
                "border": "1px solid #ffe082",
                "borderRadius": "8px",
                "color": "#8d6e00",
                "fontSize": "14px"
            }
        )
    if controller.has_error:
        return html.Div(
            "Repeated errors while refreshing. Prices may be out of date.",
            style={"color": "#dc3545", "fontSize": "14px"}
        )
    return None


def render_notice(notice: Optional[Notice]) -> Optional[html.Div]:
    if notice is None:
        return None
    return html.Div(
        style={
            "marginBottom": "10px",
            "padding": "10px 14px",
            "backgroundColor": "#ffffff",
            "borderLeft": f"4px solid {NOTICE_COLORS.get(notice.variant, NOTICE_COLORS['default'])}",
            "borderRadius": "4px",
            "boxShadow": "0 1px 3px rgba(0,0,0,0.1)",
            "fontSize": "14px"
        },
        children=[
            html.Strong(notice.title),
            html.Span(f" {notice.description}"),
        ]
    )
