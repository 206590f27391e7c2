"""
prism_neo.api.__main__

`prism-neo` console script (also `python -m prism_neo.api`).

Binds to `PRISM_API_HOST`/`PRISM_API_PORT`. uvicorn's own logging config and access log are
off: `observability.middleware` already writes one `http_request` line per call, with the
request id.
"""

from __future__ import annotations

import uvicorn

from prism_neo.api.app import create_app
from prism_neo.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
