"""Application entry point for the numbergen server."""

from numbergen.app import App
from numbergen.config import Config
from numbergen.logging import setup_logging
from numbergen.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
