"""Single-shot HTTP fetch of a descriptor document."""

from __future__ import annotations

import logging

import requests

from dzview.config import FETCH_TIMEOUT_S, USER_AGENT
from dzview.core.session import FetchFailed, FetchSucceeded

logger = logging.getLogger(__name__)


def fetch_descriptor(
    url: str,
    http: requests.Session | None = None,
    timeout: float = FETCH_TIMEOUT_S,
) -> FetchSucceeded | FetchFailed:
    """GET ``url`` once and wrap the outcome as a session event.

    No retries are attempted. Any non-2xx status counts as a failure; the
    status code itself is not interpreted further.

    Params:
        url: Descriptor URL
        http: optional requests.Session for connection reuse
        timeout: request timeout in seconds

    Returns:
        FetchSucceeded with the response body, or FetchFailed with a reason.
    """
    if http is None:
        with requests.Session() as owned:
            return fetch_descriptor(url, http=owned, timeout=timeout)

    try:
        response = http.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning("Descriptor fetch failed for %s: %s", url, e)
        return FetchFailed(reason=str(e))

    logger.debug("Fetched %d characters from %s", len(response.text), url)
    return FetchSucceeded(text=response.text)
