"""Uvicorn server runner with custom configuration."""

import copy

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from reelgate.app import App
from reelgate.config import Config
from reelgate.web.server import create_fastapi_app

# Open video streams would otherwise hold shutdown until the viewer stops watching
GRACEFUL_SHUTDOWN_SECONDS = 5


def run_server(app: App, config: Config) -> None:
    """Run the Uvicorn server with compact access logs."""
    fastapi_app = create_fastapi_app(app, config)

    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"

    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=log_config,
        access_log=True,
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_SECONDS,
    )
