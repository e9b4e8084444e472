import asyncio
from typing import Any

from loguru import logger
from web3 import AsyncWeb3
from web3.exceptions import BadFunctionCallOutput

from launchpad_sdk.core.constants.base import ZERO_ADDRESS
from launchpad_sdk.core.constants.erc20_abi import ERC20_ABI
from launchpad_sdk.core.utils.transaction import SignCallback, send_transaction
from launchpad_sdk.core.utils.web3 import web3_from_chain_id

NATIVE_TOKEN_ADDRESSES: set = {
    ZERO_ADDRESS,
    "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee",
}


def is_native_token(token_address: str | None) -> bool:
    if token_address is None:
        return True
    normalized = str(token_address).strip().lower()
    if normalized in ("", "native"):
        return True
    return normalized in NATIVE_TOKEN_ADDRESSES


def _coerce_bytes32_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).rstrip(b"\x00").decode("utf-8", errors="ignore")
    return str(value)


async def _erc20_string(web3: AsyncWeb3, token_address: str, field: str) -> str:
    checksum_token = web3.to_checksum_address(token_address)
    contract = web3.eth.contract(address=checksum_token, abi=ERC20_ABI)
    fn = getattr(contract.functions, field)
    try:
        return _coerce_bytes32_str(await fn().call())
    except (BadFunctionCallOutput, ValueError):
        # Some ERC20s use bytes32 for name/symbol (non-standard).
        bytes32_abi = [
            {
                "constant": True,
                "inputs": [],
                "name": field,
                "outputs": [{"name": "", "type": "bytes32"}],
                "type": "function",
            }
        ]
        contract32 = web3.eth.contract(address=checksum_token, abi=bytes32_abi)
        fn32 = getattr(contract32.functions, field)
        return _coerce_bytes32_str(await fn32().call())


async def get_erc20_metadata(token_address: str, chain_id: int) -> tuple[str, str, int]:
    """Return ``(symbol, name, decimals)``."""
    async with web3_from_chain_id(chain_id) as web3:
        checksum_token = web3.to_checksum_address(token_address)
        contract = web3.eth.contract(address=checksum_token, abi=ERC20_ABI)

        symbol, name, decimals = await asyncio.gather(
            _erc20_string(web3, checksum_token, "symbol"),
            _erc20_string(web3, checksum_token, "name"),
            contract.functions.decimals().call(),
        )
        return str(symbol), str(name), int(decimals)


async def get_token_total_supply(token_address: str, chain_id: int) -> int:
    async with web3_from_chain_id(chain_id) as web3:
        contract = web3.eth.contract(
            address=web3.to_checksum_address(token_address), abi=ERC20_ABI
        )
        return int(await contract.functions.totalSupply().call())


async def get_token_balance(
    token_address: str | None,
    chain_id: int,
    wallet_address: str,
    *,
    web3: AsyncWeb3 | None = None,
    block_identifier: str | int = "pending",
) -> int:
    async def _read_with_web3(w3: AsyncWeb3) -> int:
        checksum_wallet = w3.to_checksum_address(wallet_address)

        if is_native_token(token_address):
            balance = await w3.eth.get_balance(
                checksum_wallet,
                block_identifier=block_identifier,
            )
            return int(balance)

        checksum_token = w3.to_checksum_address(str(token_address))
        contract = w3.eth.contract(address=checksum_token, abi=ERC20_ABI)
        balance = await contract.functions.balanceOf(checksum_wallet).call(
            block_identifier=block_identifier
        )
        return int(balance)

    if web3 is None:
        async with web3_from_chain_id(chain_id) as w3:
            return await _read_with_web3(w3)
    return await _read_with_web3(web3)


async def get_token_allowance(
    token_address: str, chain_id: int, owner_address: str, spender_address: str
) -> int:
    async with web3_from_chain_id(chain_id) as web3:
        contract = web3.eth.contract(
            address=web3.to_checksum_address(token_address), abi=ERC20_ABI
        )
        allowance = await contract.functions.allowance(
            web3.to_checksum_address(owner_address),
            web3.to_checksum_address(spender_address),
        ).call(block_identifier="pending")
        return int(allowance)


async def build_approve_transaction(
    from_address: str,
    chain_id: int,
    token_address: str,
    spender_address: str,
    amount: int,
) -> dict:
    async with web3_from_chain_id(chain_id) as web3:
        contract = web3.eth.contract(
            address=web3.to_checksum_address(token_address), abi=ERC20_ABI
        )
        data = contract.encode_abi(
            "approve",
            [
                web3.to_checksum_address(spender_address),
                amount,
            ],
        )
        return {
            "to": web3.to_checksum_address(token_address),
            "from": web3.to_checksum_address(from_address),
            "data": data,
            "chainId": chain_id,
        }


async def ensure_allowance(
    *,
    token_address: str,
    owner: str,
    spender: str,
    amount: int,
    chain_id: int,
    signing_callback: SignCallback,
    approval_amount: int | None = None,
) -> tuple[bool, str | None]:
    """Approve ``spender`` when the current allowance is below ``amount``.

    Returns ``(approval_sent, txn_hash)``. The approval is awaited to a receipt
    before returning, so a follow-up spend sees the new allowance.
    """
    allowance = await get_token_allowance(token_address, chain_id, owner, spender)
    if allowance >= amount:
        return False, None

    logger.info(
        f"Approval needed for {token_address}: allowance={allowance} required={amount}"
    )
    approve_tx = await build_approve_transaction(
        from_address=owner,
        chain_id=chain_id,
        token_address=token_address,
        spender_address=spender,
        amount=approval_amount if approval_amount is not None else amount,
    )
    txn_hash = await send_transaction(approve_tx, signing_callback)
    return True, txn_hash
