"""Application entry point for the ReelGate server."""

from reelgate.app import App
from reelgate.config import Config
from reelgate.logging import setup_logging
from reelgate.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
