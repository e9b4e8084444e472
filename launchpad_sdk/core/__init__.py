from launchpad_sdk.core.adapters.BaseAdapter import BaseAdapter
from launchpad_sdk.core.errors import ErrorInfo, ErrorKind, LaunchpadError

__all__ = ["BaseAdapter", "ErrorInfo", "ErrorKind", "LaunchpadError"]
