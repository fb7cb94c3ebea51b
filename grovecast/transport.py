"""Shared HTTP helpers for the remote AI services."""

import json
from typing import Any, Dict, Optional

import httpx
from rich.console import Console

from .errors import EncodingError, HTTPError, NetworkError

console = Console()

MAX_ERROR_BODY_CHARS = 500


def post_json(
    client: httpx.Client,
    url: str,
    payload: Dict[str, Any],
    headers: Dict[str, str],
    service: str,
    timeout: Optional[float] = None,
) -> httpx.Response:
    """
    POST a JSON body and return the response if the status is 200.

    Args:
        client: HTTP client to send with
        url: Endpoint URL
        payload: JSON-serializable request body
        headers: Extra request headers (auth etc.)
        service: Service name used in error messages
        timeout: Per-request timeout in seconds (client default if None)

    Returns:
        The successful response

    Raises:
        EncodingError: The body or URL could not be encoded
        NetworkError: The request did not complete
        HTTPError: The service answered with a non-200 status
    """
    try:
        body = json.dumps(payload)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"{service} encoding failed: {e}") from e

    request_headers = {"Content-Type": "application/json", **headers}
    request_timeout = timeout if timeout is not None else client.timeout

    try:
        response = client.post(url, content=body, headers=request_headers, timeout=request_timeout)
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
        raise EncodingError(f"{service} invalid URL: {url}") from e
    except httpx.HTTPError as e:
        raise NetworkError(f"{service} network error: {e}") from e

    if response.status_code != 200:
        error_body = response.text[:MAX_ERROR_BODY_CHARS]
        console.print(f"[red]{service} error response ({response.status_code}): {error_body}[/red]")
        raise HTTPError(response.status_code, service=service, body=error_body)

    return response
