from __future__ import annotations

import functools
from abc import ABC
from collections.abc import Callable
from typing import Any

from loguru import logger

from launchpad_sdk.core.errors import WalletNotConnectedError


def require_wallet(fn: Callable) -> Callable:
    """Raise ``WalletNotConnectedError`` before touching the chain if no wallet."""

    @functools.wraps(fn)
    async def wrapper(self: BaseAdapter, *args: Any, **kwargs: Any) -> Any:
        wallet = getattr(self, "wallet", None)
        if wallet is None or not wallet.connected or not wallet.address:
            raise WalletNotConnectedError()
        return await fn(self, *args, **kwargs)

    return wrapper


class BaseAdapter(ABC):
    adapter_type: str | None = None

    def __init__(self, name: str, config: dict[str, Any] | None = None):
        self.name = name
        self.config = config or {}
        self.logger = logger.bind(adapter=self.__class__.__name__)
