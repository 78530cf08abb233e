"""Uvicorn server runner."""

import copy

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from numbergen.app import App
from numbergen.config import Config
from numbergen.web.server import create_fastapi_app


def build_log_config(debug: bool) -> dict:
    """Uvicorn logging config with a timestamped format at the app's log level."""
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    level = "DEBUG" if debug else "INFO"
    for logger_config in log_config["loggers"].values():
        logger_config["level"] = level
    return log_config


def run_server(app: App, config: Config) -> None:
    """Serve the number generator API until interrupted."""
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=build_log_config(config.debug),
        access_log=True,
    )
