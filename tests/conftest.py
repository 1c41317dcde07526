"""
Shared fixtures for the test suites
"""

import json
from datetime import datetime, timezone

import pytest

from common.config import MenuConfig
from menu_history.store import MealStore


SAMPLE_PAYLOAD = {
    "g1": {
        "denMap": {
            "2026-02-09": {
                "datumden": "MONDAY 9.2.2026",
                "menuMap": {
                    "1": {"nazev": "Soup", "isFirst": True},
                    "2": {"nazev": "Stew", "isFirst": False}
                }
            }
        }
    }
}


def make_page(payload, call_name="renderJidelnicek") -> str:
    """Wrap a payload in a page the way the menu site embeds it"""
    return f"""<!DOCTYPE html>
<html>
<head>
  <title>Jídelníček</title>
  <script src="/static/app.js"></script>
  <script>window.dataLayer = window.dataLayer || [];</script>
</head>
<body>
  <div id="jidelnicek"></div>
  <script>
    {call_name}({json.dumps(payload, ensure_ascii=False)});
  </script>
</body>
</html>
"""


@pytest.fixture
def sample_payload():
    return json.loads(json.dumps(SAMPLE_PAYLOAD))


@pytest.fixture
def page_factory():
    return make_page


@pytest.fixture
def sample_page():
    return make_page(SAMPLE_PAYLOAD)


@pytest.fixture
def config(tmp_path):
    return MenuConfig(
        source_url="https://menu.example.test/jidelnicek",
        name="Test Menu",
        ignore=["oběd"],
        data_dir=tmp_path / "data",
    )


@pytest.fixture
def store(config):
    return MealStore(config.data_dir, config.storage_key)


@pytest.fixture
def now():
    return datetime(2026, 2, 9, 6, 30, tzinfo=timezone.utc)
