"""Error taxonomy for chain access.

Everything raised while talking to the node derives from ChainRpcError so
callers that absorb failures can catch a single type.
"""


class ChainRpcError(Exception):
    """Base class for transport, protocol and decode failures."""


class TransportError(ChainRpcError):
    """The request never produced a usable HTTP response."""


class DeadlineExceeded(TransportError):
    """The caller's deadline passed before or during the request."""


class RpcProtocolError(ChainRpcError):
    """The node answered with a populated JSON-RPC ``error`` member."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"eth error: [{code}] {message}")


class DecodeError(ChainRpcError):
    """A response body, hex quantity or result object could not be decoded."""
