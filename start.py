"""Simple launcher for the geocoding API.

Starts uvicorn with the FastAPI app factory, using host and port from
the PROPGEO_API_* environment settings.
"""

from __future__ import annotations

import uvicorn

from propgeo.config import get_config


def main() -> None:
    api = get_config().api
    print(f"=== Geocoding API on http://{api.host}:{api.port}{api.prefix} ===")
    uvicorn.run(
        "propgeo.api.app:create_app",
        factory=True,
        host=api.host,
        port=api.port,
    )


if __name__ == "__main__":
    main()
