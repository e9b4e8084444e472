from __future__ import annotations

from collections.abc import Callable
from typing import Any

from loguru import logger

from launchpad_sdk.adapters.factory_adapter.adapter import TokenFactoryAdapter
from launchpad_sdk.core.errors import (
    CreationEventNotFoundError,
    LaunchpadError,
    WalletNotConnectedError,
    classify_error,
)
from launchpad_sdk.core.models import (
    CreationResult,
    TokenCreationForm,
    TokenDescriptor,
)
from launchpad_sdk.core.utils.transaction import (
    prepare_transaction,
    sign_and_broadcast,
    wait_for_transaction_receipt,
)
from launchpad_sdk.core.wallet import WalletSession, ensure_wallet_chain
from launchpad_sdk.deployment.state import DeploymentStep
from launchpad_sdk.trading.resolver import (
    AmmAddressCache,
    TokenCreatedEvent,
    decode_token_created,
)

StepCallback = Callable[[DeploymentStep], None]


def find_token_created_event(
    receipt: dict[str, Any], factory_address: str
) -> TokenCreatedEvent | None:
    factory = factory_address.lower()
    for log in receipt.get("logs") or []:
        if str(log.get("address", "")).lower() != factory:
            continue
        event = decode_token_created(log)
        if event is not None:
            return event
    return None


async def create_token_on_chain(
    wallet: WalletSession,
    chain_id: int,
    form: TokenCreationForm,
    *,
    image_url: str | None = None,
    cache: AmmAddressCache | None = None,
    on_step: StepCallback | None = None,
) -> CreationResult:
    """Create one token on ``chain_id`` and return its token/pool addresses.

    ``on_step`` is called with SIGNER_READY, GAS_ESTIMATED and SUBMITTED as the
    attempt passes each point. Failures are raised as typed launchpad errors;
    a transaction that confirms without a creation event raises
    ``CreationEventNotFoundError`` carrying the hash.
    """
    if wallet is None or not wallet.connected or not wallet.address:
        raise WalletNotConnectedError()

    def _step(step: DeploymentStep) -> None:
        if on_step is not None:
            on_step(step)

    log = logger.bind(component="create_token", chain_id=chain_id)
    txn_hash: str | None = None
    try:
        await ensure_wallet_chain(wallet, chain_id, "create this token")
        factory = TokenFactoryAdapter(chain_id)
        _step(DeploymentStep.SIGNER_READY)

        fee = await factory.creation_fee()
        transaction = await factory.build_create_token_transaction(
            form, from_address=wallet.address, value=fee, image_url=image_url
        )
        transaction = await prepare_transaction(transaction)
        log.info(f"createToken gas limit {transaction['gas']} (fee {fee} wei)")
        _step(DeploymentStep.GAS_ESTIMATED)

        txn_hash = await sign_and_broadcast(transaction, wallet.sign_transaction)
        _step(DeploymentStep.SUBMITTED)

        receipt = await wait_for_transaction_receipt(chain_id, txn_hash)
        event = find_token_created_event(receipt, factory.factory_address)
        if event is None:
            raise CreationEventNotFoundError(tx_hash=txn_hash)
    except LaunchpadError as exc:
        if txn_hash and not exc.tx_hash:
            exc.tx_hash = txn_hash
        raise
    except Exception as exc:
        raise classify_error(exc, tx_hash=txn_hash) from exc

    if cache is not None:
        cache.set(chain_id, event.token_address, event.pool_address)
    log.info(
        f"Token {event.token_address} created with pool {event.pool_address} ({txn_hash})"
    )
    return CreationResult(
        token_address=event.token_address,
        pool_address=event.pool_address,
        tx_hash=txn_hash,
        chain_id=chain_id,
        descriptor=TokenDescriptor(
            address=event.token_address,
            chain_id=chain_id,
            name=form.name,
            symbol=form.symbol,
            description=form.description,
            image_url=image_url or "",
            creator=event.creator or wallet.address,
            total_supply=form.total_supply,
        ),
    )
