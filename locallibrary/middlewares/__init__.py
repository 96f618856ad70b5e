from fastapi import FastAPI

from locallibrary.middlewares.logging_middleware import LoggingMiddleware


def setup_middlewares(app: FastAPI) -> None:
    """Register the application middlewares."""
    app.add_middleware(LoggingMiddleware)


__all__ = ["LoggingMiddleware", "setup_middlewares"]
