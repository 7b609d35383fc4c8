"""ASGI entrypoint serving the Guildhall API."""

from __future__ import annotations

from guildhall.api.app import app

__all__ = ["app"]


if __name__ == "__main__":  # pragma: no cover - manual launch helper
    import uvicorn

    uvicorn.run("guildhall.main:app", host="0.0.0.0", port=8000, reload=True)
