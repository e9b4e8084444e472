from __future__ import annotations

import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from typing import Any

import click
from loguru import logger
from pydantic import BaseModel, ValidationError

from launchpad_sdk.adapters.launchpad_adapter.adapter import LaunchpadAdapter
from launchpad_sdk.core.chains import are_contracts_deployed, get_chain_info
from launchpad_sdk.core.config import get_default_chain_id, load_config
from launchpad_sdk.core.constants.base import DEFAULT_SLIPPAGE_TOLERANCE_PERCENT
from launchpad_sdk.core.constants.chains import SUPPORTED_CHAINS
from launchpad_sdk.core.errors import LaunchpadError
from launchpad_sdk.core.models import TokenCreationForm, TradeIntent
from launchpad_sdk.core.wallet import LocalAccountWallet
from launchpad_sdk.deployment.state import DeploymentMode


def _jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, dict):
        return {str(k): _jsonable(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [_jsonable(v) for v in data]
    return data


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(_jsonable(data), indent=2, default=str))


def _echo_status(ok: bool, payload: Any) -> None:
    if ok:
        _echo_json({"ok": True, "result": payload})
    else:
        _echo_json({"ok": False, "error": payload})


def _echo_error(exc: LaunchpadError) -> None:
    _echo_json({"ok": False, "error": exc.to_info()})


def _usage_error(exc: ValidationError) -> click.UsageError:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
        for err in exc.errors()
    )
    return click.UsageError(f"Invalid input: {problems}")


def _make_adapter(ctx: click.Context, *, with_wallet: bool) -> LaunchpadAdapter:
    chain_id = ctx.obj["chain_id"]
    wallet = LocalAccountWallet.from_config(chain_id) if with_wallet else None
    return LaunchpadAdapter({"chain_id": chain_id}, wallet=wallet)


def _run_read(
    ctx: click.Context,
    call: Callable[[LaunchpadAdapter], Awaitable[tuple[bool, Any]]],
) -> None:
    async def _main() -> tuple[bool, Any]:
        adapter = _make_adapter(ctx, with_wallet=False)
        ok, info = await adapter.initialize()
        if not ok:
            return ok, info
        return await call(adapter)

    try:
        ok, payload = asyncio.run(_main())
    except LaunchpadError as exc:
        _echo_error(exc)
        ctx.exit(1)
        return
    _echo_status(ok, payload)
    if not ok:
        ctx.exit(1)


@click.group(name="launchpad", help="Quote, trade and deploy launchpad tokens.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to config.json (defaults to LAUNCHPAD_CONFIG_PATH or ./config.json).",
)
@click.option("--chain-id", type=int, default=None, help="Active chain id.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
)
@click.pass_context
def launchpad_cli(
    ctx: click.Context, config_path: str | None, chain_id: int | None, log_level: str
) -> None:
    logger.remove()
    logger.add(sys.stderr, level=str(log_level).upper())
    if config_path:
        load_config(config_path, require_exists=True)
    ctx.ensure_object(dict)
    ctx.obj["chain_id"] = chain_id if chain_id is not None else get_default_chain_id()


@launchpad_cli.command(name="chains", help="List supported chains and their contracts.")
def chains_cmd() -> None:
    rows = []
    for chain_id in SUPPORTED_CHAINS:
        info = get_chain_info(chain_id)
        rows.append(
            {
                "chain_id": chain_id,
                "name": info.name,
                "native": info.native_symbol,
                "testnet": info.testnet,
                "contracts_deployed": are_contracts_deployed(chain_id),
            }
        )
    _echo_json({"ok": True, "result": rows})


@launchpad_cli.command(name="tokens", help="List tokens created by the factory.")
@click.pass_context
def tokens_cmd(ctx: click.Context) -> None:
    _run_read(ctx, lambda a: a.get_all_tokens())


@launchpad_cli.command(name="token-info", help="Show config and trading info.")
@click.argument("token")
@click.option("--with-creator", is_flag=True, help="Scan logs for the creator.")
@click.pass_context
def token_info_cmd(ctx: click.Context, token: str, with_creator: bool) -> None:
    _run_read(ctx, lambda a: a.get_token_info(token, include_creator=with_creator))


@launchpad_cli.command(name="resolve-pool", help="Resolve the pool for a token.")
@click.argument("token")
@click.pass_context
def resolve_pool_cmd(ctx: click.Context, token: str) -> None:
    _run_read(ctx, lambda a: a.resolve_pool_address(token))


@launchpad_cli.command(name="quote", help="Quote a buy (native in) or a sell.")
@click.argument("token")
@click.argument("amount")
@click.option(
    "--action", type=click.Choice(["buy", "sell"]), default="buy", show_default=True
)
@click.pass_context
def quote_cmd(ctx: click.Context, token: str, amount: str, action: str) -> None:
    _run_read(ctx, lambda a: a.get_swap_quote(token, amount, action))


@launchpad_cli.command(name="trade", help="Quote then execute a trade.")
@click.argument("token")
@click.argument("amount")
@click.option(
    "--action", type=click.Choice(["buy", "sell"]), default="buy", show_default=True
)
@click.option(
    "--slippage",
    type=float,
    default=DEFAULT_SLIPPAGE_TOLERANCE_PERCENT,
    show_default=True,
    help="Slippage tolerance in percent.",
)
@click.pass_context
def trade_cmd(
    ctx: click.Context, token: str, amount: str, action: str, slippage: float
) -> None:
    async def _main() -> tuple[bool, Any]:
        adapter = _make_adapter(ctx, with_wallet=True)
        ok, info = await adapter.initialize()
        if not ok:
            return ok, info
        ok, quote = await adapter.get_swap_quote(token, amount, action)
        if not ok:
            return ok, quote
        intent = TradeIntent.from_quote(token, action, amount, quote, slippage)
        txn_hash = await adapter.execute_trade(intent)
        return True, {"tx_hash": txn_hash, "quote": quote}

    try:
        ok, payload = asyncio.run(_main())
    except ValidationError as exc:
        raise _usage_error(exc) from exc
    except LaunchpadError as exc:
        _echo_error(exc)
        ctx.exit(1)
        return
    _echo_status(ok, payload)
    if not ok:
        ctx.exit(1)


@launchpad_cli.command(name="deploy", help="Create a token on one or more chains.")
@click.option("--chain", "chains", type=int, multiple=True, required=True)
@click.option("--name", required=True)
@click.option("--symbol", required=True)
@click.option("--description", default="", show_default=True)
@click.option("--total-supply", required=True)
@click.option("--base-price", required=True)
@click.option("--slope", default="0", show_default=True)
@click.option(
    "--curve-type",
    type=click.Choice(["linear", "exponential"]),
    default="linear",
    show_default=True,
)
@click.option("--image-url", default=None)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in DeploymentMode]),
    default=DeploymentMode.SEQUENTIAL.value,
    show_default=True,
)
@click.option("--settle-seconds", type=float, default=None)
@click.pass_context
def deploy_cmd(
    ctx: click.Context,
    chains: tuple[int, ...],
    name: str,
    symbol: str,
    description: str,
    total_supply: str,
    base_price: str,
    slope: str,
    curve_type: str,
    image_url: str | None,
    mode: str,
    settle_seconds: float | None,
) -> None:
    try:
        form = TokenCreationForm(
            name=name,
            symbol=symbol,
            description=description,
            total_supply=total_supply,
            base_price=base_price,
            slope=slope,
            curve_type=curve_type,
        )
    except ValidationError as exc:
        raise _usage_error(exc) from exc

    async def _main() -> dict[int, Any]:
        adapter = _make_adapter(ctx, with_wallet=True)
        adapter.orchestrator.mode = DeploymentMode(mode)
        if settle_seconds is not None:
            adapter.orchestrator.switch_settle_seconds = settle_seconds
        return await adapter.deploy_to_multiple_chains(list(chains), form, image_url)

    try:
        results = asyncio.run(_main())
    except LaunchpadError as exc:
        _echo_error(exc)
        ctx.exit(1)
        return
    all_ok = all(r.success for r in results.values())
    _echo_json({"ok": all_ok, "result": results})
    if not all_ok:
        ctx.exit(1)


def main() -> None:
    launchpad_cli(obj={})


if __name__ == "__main__":
    main()
