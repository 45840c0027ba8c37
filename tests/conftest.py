import sys
from pathlib import Path

import pytest

# Ensure repository root is on the import path for local package imports during tests.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture()
def dblp_xml() -> str:
    return (FIXTURES / "dblp_search.xml").read_text(encoding="utf-8")


@pytest.fixture()
def scholar_html() -> str:
    return (FIXTURES / "scholar_search.html").read_text(encoding="utf-8")
