"""Shared HTTP client construction."""

from __future__ import annotations

import ssl

import httpx
import truststore

ssl_context = truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)


def build_client(*, skip_tls: bool = False) -> httpx.Client:
    """Return an httpx client that verifies TLS against the system trust store."""
    verify = False if skip_tls else ssl_context
    return httpx.Client(verify=verify, follow_redirects=True)


def error_detail(response: httpx.Response) -> str:
    """Best-effort human message from an error response body."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if payload.get("message"):
            return str(payload["message"])
    return response.reason_phrase or f"HTTP {response.status_code}"


__all__ = ["build_client", "error_detail", "ssl_context"]
