#!/usr/bin/env python3
"""Run the wishlist web server."""
import argparse

from wishlist.config import configure_logging, settings


def main():
    import uvicorn

    parser = argparse.ArgumentParser(description="Run the wishlist web server")
    parser.add_argument("--host", default=settings.API_HOST)
    parser.add_argument("--port", type=int, default=settings.API_PORT)
    parser.add_argument("--reload", action="store_true", help="Enable hot reload")
    args = parser.parse_args()

    configure_logging()

    ssl_options = {}
    if settings.tls_enabled:
        ssl_options = {
            "ssl_certfile": str(settings.CERT_FILE),
            "ssl_keyfile": str(settings.KEY_FILE),
        }

    scheme = "https" if ssl_options else "http"
    print(f"Wishlist running on {scheme}://{args.host}:{args.port} (DB: {settings.DATABASE_PATH})")

    uvicorn.run(
        "server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
        **ssl_options,
    )


if __name__ == "__main__":
    main()
