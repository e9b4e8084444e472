from contextlib import asynccontextmanager

from aiohttp import ClientTimeout
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.middleware import ExtraDataToPOAMiddleware

from launchpad_sdk.core.config import get_rpc_read_timeout, get_rpc_urls_for_chain
from launchpad_sdk.core.constants.chains import POA_MIDDLEWARE_CHAIN_IDS
from launchpad_sdk.core.errors import ChainNotConfiguredError


def _get_rpcs_for_chain_id(chain_id: int) -> list[str]:
    rpcs = get_rpc_urls_for_chain(chain_id)
    if not rpcs:
        raise ChainNotConfiguredError(f"No RPCs configured for chain ID {chain_id}")
    return rpcs


def _get_web3(rpc: str, chain_id: int) -> AsyncWeb3:
    provider = AsyncHTTPProvider(
        rpc,
        request_kwargs={
            "headers": AsyncHTTPProvider.get_request_headers(),
            "timeout": ClientTimeout(total=get_rpc_read_timeout()),
        },
    )
    web3 = AsyncWeb3(provider)
    if chain_id in POA_MIDDLEWARE_CHAIN_IDS:
        web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return web3


def get_transaction_chain_id(transaction: dict) -> int:
    if "chainId" not in transaction:
        raise ValueError("Transaction does not contain chainId")
    return int(transaction["chainId"])


def get_web3s_from_chain_id(chain_id: int) -> list[AsyncWeb3]:
    rpcs = _get_rpcs_for_chain_id(chain_id)
    return [_get_web3(rpc, chain_id) for rpc in rpcs]


@asynccontextmanager
async def web3s_from_chain_id(chain_id: int):
    web3s = get_web3s_from_chain_id(chain_id)
    try:
        yield web3s
    finally:
        for web3 in web3s:
            await web3.provider.disconnect()


@asynccontextmanager
async def web3_from_chain_id(chain_id: int):
    web3s = get_web3s_from_chain_id(chain_id)
    try:
        yield web3s[0]
    finally:
        await web3s[0].provider.disconnect()
