"""Development server entry point.

Usage:
    python -m gateway

    Or via the console script:
    image-gateway
"""
import uvicorn

from gateway.config import settings


def main() -> None:
    """Serve the app on 0.0.0.0:PORT."""
    uvicorn.run("gateway.main:app", host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
