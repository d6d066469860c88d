"""HTTP audit log: one line per request written to ``<log_dir>/<name>.log``."""
from __future__ import annotations

import logging
import uuid
from pathlib import Path
from time import perf_counter

from fastapi import FastAPI, Request

REQUEST_ID_HEADER = "X-Request-ID"


def _build_logger(name: str, log_dir: str) -> logging.Logger:
    logger = logging.getLogger(f"audit.{name}")
    if logger.handlers:
        return logger

    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)
    logger.setLevel(logging.INFO)
    handler = logging.FileHandler(path / f"{name}.log")
    handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)
    return logger


def add_audit_middleware(app: FastAPI, name: str, log_dir: str) -> None:
    """Log method, path, status, client and latency of every request.

    Server errors are logged at ERROR level. The request id is taken from the
    ``X-Request-ID`` header when the client sends one and echoed back.
    """
    logger = _build_logger(name, log_dir)

    @app.middleware("http")
    async def audit_logger(request: Request, call_next):  # type: ignore[override]
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        start = perf_counter()
        response = await call_next(request)
        duration_ms = (perf_counter() - start) * 1000
        logger.log(
            logging.ERROR if response.status_code >= 500 else logging.INFO,
            "%s %s | status=%s | client=%s | request_id=%s | duration=%.2fms",
            request.method,
            request.url.path,
            response.status_code,
            request.client.host if request.client else "unknown",
            request_id,
            duration_ms,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
