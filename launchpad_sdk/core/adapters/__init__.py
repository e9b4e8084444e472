from launchpad_sdk.core.adapters.BaseAdapter import BaseAdapter, require_wallet
from launchpad_sdk.core.adapters.decorators import status_tuple

__all__ = ["BaseAdapter", "require_wallet", "status_tuple"]
