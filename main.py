"""Main entry point for the Crypto Price Dashboard."""
from src.app.app import create_app, run_app
from src.app.controller import DashboardController
from src.app.runner import BackgroundLoop
from src.data import HttpTransport, build_orchestrator
from src.utils import setup_logger

logger = setup_logger(__name__)


def main():
    """Wire the fetch pipeline to the dashboard and start serving."""
    runner = BackgroundLoop().start()
    transport = HttpTransport()
    controller = DashboardController(build_orchestrator(transport))

    app = create_app(controller, runner)
    try:
        run_app(app)
    finally:
        runner.run(transport.close())
        runner.stop()


if __name__ == "__main__":
    main()
