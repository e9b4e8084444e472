import json
import os
import re
from pathlib import Path
from typing import Any

from launchpad_sdk.core.constants.base import (
    DEFAULT_QUOTE_DEBOUNCE_SECONDS,
    DEFAULT_RPC_READ_TIMEOUT,
    DEFAULT_TRANSACTION_TIMEOUT,
)
from launchpad_sdk.core.constants.chains import (
    CHAIN_ID_TO_CODE,
    DEFAULT_CHAIN_ID,
    PUBLIC_RPC_URLS,
)

_CONFIG_ENV_KEYS = ("LAUNCHPAD_CONFIG_PATH", "LAUNCHPAD_CONFIG")
_DEFAULT_CONFIG_FILENAME = "config.json"
_PRIVATE_KEY_ENV = "LAUNCHPAD_PRIVATE_KEY"
_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")

_CONTRACT_KEYS = ("token_factory", "fee_recipient", "dex_router_registry")


def _find_project_root(start: Path) -> Path | None:
    cur = start.resolve()
    for parent in [cur, *cur.parents]:
        if (parent / "pyproject.toml").exists():
            return parent
    return None


def _project_root() -> Path | None:
    return _find_project_root(Path.cwd()) or _find_project_root(Path(__file__).parent)


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path).expanduser()

    env_path = next(
        (os.getenv(k, "").strip() for k in _CONFIG_ENV_KEYS if os.getenv(k)), ""
    )
    if env_path:
        p = Path(env_path).expanduser()
        if p.is_absolute():
            return p
        root = _project_root()
        return (root / p) if root else p

    root = _project_root()
    return (root / _DEFAULT_CONFIG_FILENAME) if root else Path(_DEFAULT_CONFIG_FILENAME)


def load_config_json(
    path: str | Path | None = None, *, require_exists: bool = False
) -> dict[str, Any]:
    cfg_path = resolve_config_path(path)
    if not cfg_path.exists():
        if require_exists:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return {}
    try:
        return json.loads(cfg_path.read_text())
    except json.JSONDecodeError:
        return {}


CONFIG: dict[str, Any] = load_config_json()


def set_config(config: dict[str, Any]) -> None:
    """Replace the global CONFIG dict in-place.

    This allows code that imported CONFIG at module import time to see updates.
    """
    CONFIG.clear()
    CONFIG.update(config)


def load_config(
    path: str | Path | None = None, *, require_exists: bool = False
) -> None:
    """Load config from disk into the global CONFIG dict."""
    set_config(load_config_json(path, require_exists=require_exists))


def _launchpad_section() -> dict[str, Any]:
    section = CONFIG.get("launchpad", {})
    return section if isinstance(section, dict) else {}


def _lookup_by_chain(mapping: dict[Any, Any], chain_id: int) -> Any:
    value = mapping.get(str(chain_id))
    if value is None:
        value = mapping.get(chain_id)  # allow int keys
    return value


def get_default_chain_id() -> int:
    system = CONFIG.get("system", {})
    value = system.get("default_chain_id") if isinstance(system, dict) else None
    if value is not None:
        return int(value)
    env_value = os.environ.get("LAUNCHPAD_DEFAULT_CHAIN_ID", "").strip()
    return int(env_value) if env_value else DEFAULT_CHAIN_ID


def set_rpc_urls(rpc_urls: dict[str, Any]) -> None:
    CONFIG.setdefault("launchpad", {})["rpc_urls"] = rpc_urls


def get_rpc_urls() -> dict[str, Any]:
    return _launchpad_section().get("rpc_urls", {})


def get_rpc_urls_for_chain(chain_id: int) -> list[str]:
    rpcs = _lookup_by_chain(get_rpc_urls(), chain_id)
    if rpcs is None:
        rpcs = PUBLIC_RPC_URLS.get(int(chain_id))
    if not rpcs:
        return []
    if isinstance(rpcs, str):
        return [rpcs]
    return list(rpcs)


def _env_contract_address(chain_id: int, key: str) -> str | None:
    code = CHAIN_ID_TO_CODE.get(int(chain_id))
    if not code:
        return None
    env_key = f"LAUNCHPAD_{code.upper().replace('-', '_')}_{key.upper()}"
    return os.environ.get(env_key)


def get_contract_addresses(chain_id: int) -> dict[str, str]:
    configured = _lookup_by_chain(_launchpad_section().get("contracts", {}), chain_id)
    configured = configured if isinstance(configured, dict) else {}
    addresses: dict[str, str] = {}
    for key in _CONTRACT_KEYS:
        value = _env_contract_address(chain_id, key)
        if value is None:
            value = configured.get(key)
        if value and str(value).strip():
            addresses[key] = str(value).strip()
    return addresses


def _contract_address(chain_id: int, key: str) -> str | None:
    # Empty strings mean "not configured"
    return get_contract_addresses(chain_id).get(key)


def get_token_factory_address(chain_id: int) -> str | None:
    return _contract_address(chain_id, "token_factory")


def get_fee_recipient_address(chain_id: int) -> str | None:
    return _contract_address(chain_id, "fee_recipient")


def get_dex_router_registry_address(chain_id: int) -> str | None:
    return _contract_address(chain_id, "dex_router_registry")


def get_factory_deploy_block(chain_id: int) -> int:
    configured = _lookup_by_chain(_launchpad_section().get("contracts", {}), chain_id)
    if isinstance(configured, dict) and configured.get("deploy_block") is not None:
        return int(configured["deploy_block"])
    return 0


def get_configured_chain_ids() -> list[int]:
    ids = {int(k) for k in _launchpad_section().get("contracts", {})}
    ids.update(CHAIN_ID_TO_CODE)
    return sorted(ids)


def get_supported_chains() -> list[int]:
    """Chains with both a token factory and a router registry configured."""
    return [
        chain_id
        for chain_id in get_configured_chain_ids()
        if get_token_factory_address(chain_id)
        and get_dex_router_registry_address(chain_id)
    ]


def are_contracts_deployed(chain_id: int) -> bool:
    addresses = get_contract_addresses(chain_id)
    return all(addresses.get(key) for key in _CONTRACT_KEYS)


def is_valid_address(address: str) -> bool:
    return bool(_ADDRESS_RE.match(str(address)))


def _timeouts() -> dict[str, Any]:
    timeouts = _launchpad_section().get("timeouts", {})
    return timeouts if isinstance(timeouts, dict) else {}


def get_rpc_read_timeout() -> float:
    return float(_timeouts().get("rpc_read_seconds", DEFAULT_RPC_READ_TIMEOUT))


def get_receipt_timeout() -> int:
    return int(_timeouts().get("receipt_seconds", DEFAULT_TRANSACTION_TIMEOUT))


def get_quote_debounce_seconds() -> float:
    return float(
        _launchpad_section().get(
            "quote_debounce_seconds", DEFAULT_QUOTE_DEBOUNCE_SECONDS
        )
    )


def get_private_key() -> str | None:
    wallet = CONFIG.get("wallet", {})
    value = wallet.get("private_key") if isinstance(wallet, dict) else None
    if isinstance(value, str) and value.strip():
        return value.strip()
    env_value = os.environ.get(_PRIVATE_KEY_ENV, "").strip()
    return env_value or None
