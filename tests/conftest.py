"""
Shared pytest fixtures for the Fluxor test suite.
"""

import logging
import os
import sys

import pytest

# run_fluxor.py lives at the project root, outside the package.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fluxor_core.logging_config import _HumanFormatter, _JSONFormatter  # noqa: E402
from fluxor_core.selection import AssetSelection, SelectedAsset  # noqa: E402


@pytest.fixture
def clean_root_logger():
    """Drop handlers installed by setup_logging once the test is done."""
    root = logging.getLogger()
    level = root.level
    yield root
    for h in root.handlers[:]:
        if isinstance(h.formatter, (_HumanFormatter, _JSONFormatter)):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


@pytest.fixture
def dust_assets():
    """Three small balances and one too valuable to exchange."""
    return [
        SelectedAsset("a-doge", "DOGE", "12.5", "0.08", name="Dogecoin"),
        SelectedAsset("a-shib", "SHIB", "150000", "0.00001", name="Shiba Inu"),
        SelectedAsset("a-trx", "TRX", "3", "0.11", name="TRON"),
        SelectedAsset("a-eth", "ETH", "0.01", "3000", name="Ether"),
    ]


@pytest.fixture
def selection(dust_assets):
    """Selection holding every exchangeable asset from dust_assets."""
    sel = AssetSelection()
    for asset in dust_assets:
        sel.toggle(asset)
    return sel
