"""Module-level ASGI app for serverless hosts.

Point the host at ``customerbook.web.asgi:app``. Configuration is read and the
database prepared once per cold start, at import time.
"""

from __future__ import annotations

import logging

from customerbook.config import load_config
from customerbook.main import bootstrap
from customerbook.web.app import create_app

config = load_config()

# Hosts usually configure logging themselves; only fall back to basicConfig.
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

bootstrap(config)

app = create_app(config)
