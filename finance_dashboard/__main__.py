"""
Run the API server: python -m finance_dashboard
"""

import logging

import uvicorn

from finance_dashboard.config import get_settings


def main() -> None:
    settings = get_settings().app

    logging.basicConfig(
        level=logging.DEBUG if settings.debug_mode else logging.INFO,
        format="%(message)s",
    )

    uvicorn.run(
        "finance_dashboard.api:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug_mode,
    )


if __name__ == "__main__":
    main()
