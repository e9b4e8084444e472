from __future__ import annotations

from typing import Protocol, runtime_checkable

from eth_account import Account
from loguru import logger

from launchpad_sdk.core.chains import get_chain_name
from launchpad_sdk.core.config import (
    get_default_chain_id,
    get_private_key,
    get_rpc_urls_for_chain,
)
from launchpad_sdk.core.errors import ContractError, WalletNotConnectedError


@runtime_checkable
class WalletSession(Protocol):
    """A signer attached to one active chain at a time."""

    @property
    def address(self) -> str | None: ...

    @property
    def chain_id(self) -> int: ...

    @property
    def connected(self) -> bool: ...

    async def switch_network(self, chain_id: int) -> bool: ...

    async def sign_transaction(self, transaction: dict) -> bytes: ...


class LocalAccountWallet:
    def __init__(self, private_key: str, chain_id: int | None = None):
        self._account = Account.from_key(private_key)
        self._chain_id = (
            int(chain_id) if chain_id is not None else get_default_chain_id()
        )
        self.logger = logger.bind(wallet=self._account.address)

    @classmethod
    def from_config(cls, chain_id: int | None = None) -> LocalAccountWallet:
        private_key = get_private_key()
        if not private_key:
            raise WalletNotConnectedError(
                "No signing key configured (wallet.private_key or LAUNCHPAD_PRIVATE_KEY)"
            )
        return cls(private_key, chain_id)

    @property
    def address(self) -> str:
        return self._account.address

    @property
    def chain_id(self) -> int:
        return self._chain_id

    @property
    def connected(self) -> bool:
        return True

    async def switch_network(self, chain_id: int) -> bool:
        if not get_rpc_urls_for_chain(chain_id):
            self.logger.warning(f"No RPCs configured for chain {chain_id}")
            return False
        self._chain_id = int(chain_id)
        self.logger.info(f"Switched active chain to {chain_id}")
        return True

    async def sign_transaction(self, transaction: dict) -> bytes:
        if int(transaction.get("chainId", self._chain_id)) != self._chain_id:
            raise ValueError(
                f"Transaction chain {transaction.get('chainId')} does not match "
                f"active chain {self._chain_id}"
            )
        signed = self._account.sign_transaction(transaction)
        return signed.raw_transaction


async def ensure_wallet_chain(
    wallet: WalletSession, chain_id: int, action: str = "continue"
) -> None:
    """Bring ``wallet`` onto ``chain_id`` before anything is signed there."""
    if int(wallet.chain_id) == int(chain_id):
        return
    if not await wallet.switch_network(chain_id):
        raise ContractError(
            f"Wallet is on chain {wallet.chain_id}; switch to "
            f"{get_chain_name(chain_id)} to {action}."
        )
