import copy
import os
import sys
from pathlib import Path

import pytest

from launchpad_sdk.core.config import CONFIG, set_config

_repo_root = Path(__file__).parent.parent
_repo_root_str = str(_repo_root)

TEST_FACTORY = "0x" + "fa" * 20
TEST_FEE_RECIPIENT = "0x" + "fe" * 20
TEST_ROUTER_REGISTRY = "0x" + "dd" * 20

TEST_CONFIG = {
    "system": {"default_chain_id": 97},
    "launchpad": {
        "rpc_urls": {
            "97": ["http://bsc-testnet.invalid"],
            "84532": ["http://base-sepolia.invalid"],
            "421614": ["http://arbitrum-sepolia.invalid"],
        },
        "contracts": {
            "97": {
                "token_factory": TEST_FACTORY,
                "fee_recipient": TEST_FEE_RECIPIENT,
                "dex_router_registry": TEST_ROUTER_REGISTRY,
                "deploy_block": 100,
            },
            "84532": {
                "token_factory": TEST_FACTORY,
                "fee_recipient": TEST_FEE_RECIPIENT,
                "dex_router_registry": TEST_ROUTER_REGISTRY,
            },
            "421614": {
                "token_factory": "",
                "fee_recipient": "",
                "dex_router_registry": "",
            },
        },
        "timeouts": {"rpc_read_seconds": 5, "receipt_seconds": 30},
        "quote_debounce_seconds": 0.01,
    },
}


def pytest_configure(config):
    config.addinivalue_line("markers", "smoke: mark test as a smoke test")
    config.addinivalue_line("markers", "integration: mark test as integration")
    if _repo_root_str not in sys.path:
        sys.path.insert(0, _repo_root_str)


@pytest.fixture(autouse=True)
def launchpad_config(monkeypatch):
    for key in list(os.environ):
        if key.startswith("LAUNCHPAD_"):
            monkeypatch.delenv(key, raising=False)
    saved = dict(CONFIG)
    set_config(copy.deepcopy(TEST_CONFIG))
    yield CONFIG
    set_config(saved)
