"""
Source page fetcher
Retrieves the published menu page over HTTP
"""

import requests

from common.errors import FetchError


def fetch_page(url: str, timeout: float = 10) -> str:
    """
    Fetch the menu page with a single GET request

    No retries are made; the next scheduled run is the retry.

    Args:
        url: URL of the menu page
        timeout: Request timeout in seconds

    Returns:
        Page body as text

    Raises:
        FetchError: On a transport error or a non-success status
    """
    print(f"  Fetching: {url}")

    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(url, f"Request failed ({e})") from e

    if not response.ok:
        raise FetchError(url, f"Unexpected status {response.status_code}", status_code=response.status_code)

    # Menu pages are served without a charset now and then
    if not response.encoding or response.encoding.lower() == 'iso-8859-1':
        response.encoding = response.apparent_encoding

    return response.text
