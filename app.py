import logging
import os
import socket

from table_browser.logging_config import configure_logging
from table_browser.ui.dash_app import create_dash_app

configure_logging()
logger = logging.getLogger("table_browser.app")

CONFIG_ROOT = os.getenv("TABLE_BROWSER_CONFIG_ROOT", "config")

app = create_dash_app(CONFIG_ROOT)
server = app.server


def port_is_free(port: int, host: str = "localhost") -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        return s.connect_ex((host, port)) != 0


def pick_port(preferred: int, attempts: int = 50) -> int:
    """First free port in [preferred, preferred + attempts); falls back to preferred."""
    for port in range(preferred, preferred + attempts):
        if port_is_free(port):
            return port
    return preferred


def main() -> None:
    preferred = int(os.getenv("PORT", "8050"))
    port = pick_port(preferred)
    if port != preferred:
        logger.warning("Port %d is busy, serving on %d instead", preferred, port)

    debug = os.getenv("DEBUG", "0") == "1"
    logger.info("Starting table browser", extra={"config_root": CONFIG_ROOT, "port": port, "debug": debug})
    app.run(host="0.0.0.0", port=port, debug=debug)


if __name__ == "__main__":
    main()
