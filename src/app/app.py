"""Main Dash application setup."""
from dash import Dash

from src.app import callbacks, layout
from src.app.controller import DashboardController
from src.app.runner import BackgroundLoop
from src.config import DASH_DEBUG, DASH_PORT
from src.utils import setup_logger

logger = setup_logger(__name__)


def create_app(controller: DashboardController, runner: BackgroundLoop) -> Dash:
    """
    Create and configure the Dash application.

    Args:
        controller: DashboardController wrapping the fetch orchestrator
        runner: BackgroundLoop the controller's coroutines run on

    Returns:
        Configured Dash application
    """
    app = Dash(__name__, title="Crypto Price Dashboard")

    # Set layout
    app.layout = layout.create_layout()

    # Register callbacks
    callbacks.register_callbacks(app, controller, runner)

    return app


def run_app(app: Dash) -> None:
    """Run the Dash application."""
    startup_msg = f"Starting Dash… open http://127.0.0.1:{DASH_PORT}/"
    logger.info(startup_msg)
    # debug reloader would start a second fetch loop
    app.run(debug=DASH_DEBUG, port=DASH_PORT, use_reloader=False)
