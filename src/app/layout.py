"""Dash application layout."""
from dash import dash_table, dcc, html

from src.config import REFRESH_INTERVAL, SEARCH_DEBOUNCE
from src.constants import TABLE_COLUMNS

RIGHT_ALIGNED = ("current_price", "price_change_percentage_24h", "market_cap", "total_volume")


def create_layout() -> html.Div:
    """
    Create the Dash application layout.

    Returns:
        HTML Div containing the full layout
    """
    return html.Div(
        style={
            "fontFamily": "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif",
            "padding": "20px",
            "maxWidth": "100%",
            "backgroundColor": "#f8f9fa"
        },
        children=[
            html.H2(
                "Crypto Price Dashboard",
                style={
                    "marginBottom": "10px",
                    "color": "#2c3e50",
                    "fontWeight": "600"
                }
            ),

            dcc.Interval(id="auto-refresh", interval=REFRESH_INTERVAL * 1000, n_intervals=0),

            _create_controls_div(),

            html.Div(id="notice"),
            html.Div(id="mock-banner"),
            html.Div(
                id="status-line",
                style={
                    "display": "flex",
                    "justifyContent": "space-between",
                    "color": "#6c757d",
                    "fontSize": "13px",
                    "margin": "10px 0"
                }
            ),

            dcc.Loading(
                id="table-loading",
                type="default",
                children=_create_table(),
            ),
        ]
    )


def _create_controls_div() -> html.Div:
    """Create the search box and refresh button."""
    button_style = {
        "padding": "10px 20px",
        "border": "1px solid #dee2e6",
        "borderRadius": "6px",
        "backgroundColor": "#ffffff",
        "color": "#495057",
        "fontSize": "14px",
        "fontWeight": "500",
        "cursor": "pointer",
        "whiteSpace": "nowrap",
        "boxShadow": "0 1px 3px rgba(0,0,0,0.1)"
    }

    return html.Div(
        style={
            "display": "flex",
            "gap": "8px",
            "flexWrap": "wrap",
            "padding": "16px",
            "backgroundColor": "#ffffff",
            "borderRadius": "8px",
            "boxShadow": "0 2px 4px rgba(0,0,0,0.08)",
            "marginBottom": "10px"
        },
        children=[
            dcc.Input(
                id="search",
                type="text",
                placeholder="Search cryptocurrencies...",
                debounce=SEARCH_DEBOUNCE,
                value="",
                style={
                    "flex": "1",
                    "padding": "10px 12px",
                    "border": "1px solid #dee2e6",
                    "borderRadius": "6px",
                    "fontSize": "14px"
                }
            ),
            html.Button("Refresh Data", id="refresh-btn", n_clicks=0, style=button_style),
        ]
    )


def _create_table() -> dash_table.DataTable:
    """Market table. Sorting is done server-side so numbers sort as numbers."""
    return dash_table.DataTable(
        id="coin-table",
        data=[],
        columns=[{"name": header, "id": column_id} for column_id, header in TABLE_COLUMNS],
        sort_action="custom",
        sort_mode="single",
        sort_by=[],
        style_table={
            "overflowX": "auto",
            "width": "100%"
        },
        style_cell={
            "textAlign": "left",
            "padding": "12px",
            "fontFamily": "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif",
            "fontSize": "14px",
            "border": "1px solid #dee2e6"
        },
        style_cell_conditional=[
            {"if": {"column_id": column_id}, "textAlign": "right"}
            for column_id in RIGHT_ALIGNED
        ],
        style_data_conditional=[
            {
                "if": {"row_index": "odd"},
                "backgroundColor": "#f8f9fa"
            },
            {
                "if": {
                    "filter_query": '{price_change_percentage_24h} contains "+"',
                    "column_id": "price_change_percentage_24h"
                },
                "color": "#28a745"
            },
            {
                "if": {
                    "filter_query": '{price_change_percentage_24h} contains "-"',
                    "column_id": "price_change_percentage_24h"
                },
                "color": "#dc3545"
            }
        ],
        style_header={
            "backgroundColor": "#007bff",
            "color": "#ffffff",
            "fontWeight": "600",
            "textAlign": "center"
        },
        style_data={
            "backgroundColor": "#ffffff",
            "color": "#495057"
        },
    )
