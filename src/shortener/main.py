"""Application entry point for the shortener server."""

from shortener.app import App
from shortener.config import Config
from shortener.logging import setup_logging
from shortener.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
