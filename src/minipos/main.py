from __future__ import annotations

import logging

from minipos.application.container import build_container
from minipos.application.dispatch import ThreadDispatcher
from minipos.config import get_app_paths, load_settings
from minipos.domain.errors import ConfigError
from minipos.logging_config import setup_logging
from minipos.ui.app import App

log = logging.getLogger(__name__)


def main() -> None:
    paths = get_app_paths()
    setup_logging(paths.logs_dir, level=logging.INFO)

    try:
        settings = load_settings()
    except ConfigError as e:
        log.error("config_invalid error=%s", e)
        raise SystemExit(str(e))

    container = build_container(settings, dispatcher=ThreadDispatcher())
    log.info("app_started backend=%s", settings.backend_url)

    app = App(container, logs_dir=str(paths.logs_dir), exports_dir=str(paths.exports_dir))
    app.mainloop()


if __name__ == "__main__":
    main()
