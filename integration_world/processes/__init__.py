from .base import (
    BaseNodeProcess,
    BeforeSubmit,
    ClientAction,
    ManagedProcess,
    MergeMiningProxyProcess,
    MiningNodeProcess,
    NodeClient,
    OnError,
    ProcessFactory,
    ProxyClient,
    WalletProcess,
)

__all__ = [
    "BaseNodeProcess",
    "BeforeSubmit",
    "ClientAction",
    "ManagedProcess",
    "MergeMiningProxyProcess",
    "MiningNodeProcess",
    "NodeClient",
    "OnError",
    "ProcessFactory",
    "ProxyClient",
    "WalletProcess",
]
