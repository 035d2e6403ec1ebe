"""HTTP API for ChatSense"""

from __future__ import annotations


def main() -> None:
    """Run the API server (console script: chatsense-api)."""
    import uvicorn

    from chatsense.config import API_HOST, API_PORT, DEBUG

    uvicorn.run("chatsense.api.app:app", host=API_HOST, port=API_PORT, reload=DEBUG)
