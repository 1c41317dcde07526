"""
Menu payload extractor
Finds the script call that carries the menu JSON and decodes its argument
"""

import json
import re
from typing import Dict, Iterator

from bs4 import BeautifulSoup

from common.errors import ExtractionError


_decoder = json.JSONDecoder()


def _script_texts(page_text: str) -> Iterator[str]:
    """Yield the body of every <script> element, or the whole page if there are none"""
    soup = BeautifulSoup(page_text, 'html.parser')
    scripts = soup.find_all('script')
    if not scripts:
        yield page_text
        return

    for script in scripts:
        text = script.string or script.get_text()
        if text:
            yield text


def extract(page_text: str, call_name: str) -> Dict:
    """
    Extract the JSON object passed to `call_name(...)` in the page

    Calls whose argument is not an object literal (e.g. the function
    definition `function renderJidelnicek(data)`) are skipped; the first
    call with one is used.

    Args:
        page_text: Raw HTML of the menu page
        call_name: Name of the JavaScript function the payload is passed to

    Returns:
        The decoded JSON object

    Raises:
        ExtractionError: If no call with an object argument is found, or it is not valid JSON
    """
    call_re = re.compile(r'(?<![\w$])' + re.escape(call_name) + r'\s*\(\s*(?=\{)')

    for text in _script_texts(page_text):
        match = call_re.search(text)
        if not match:
            continue

        start = match.end()
        try:
            payload, end = _decoder.raw_decode(text, start)
        except json.JSONDecodeError as e:
            raise ExtractionError(f"Argument of {call_name}() is not valid JSON: {e}") from e

        if not text[end:].lstrip().startswith(')'):
            raise ExtractionError(f"Unexpected text after the argument of {call_name}()")

        return payload

    raise ExtractionError(f"No {call_name}() call found in page")
