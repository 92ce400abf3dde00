"""ASGI entrypoint: ``uvicorn metropower.asgi:app``."""

from metropower.main import create_app

app = create_app()
