# integration_world/processes/base.py
from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping, Protocol, Sequence

# Hooks handed through to the node client when it mines a block.
# The client decides when they fire; the world only forwards them.
BeforeSubmit = Callable[[Any], Any]
OnError = Callable[[BaseException], Any]


class ManagedProcess(Protocol):
    """
    Lifecycle every process wrapper exposes.

    - init / compile : build prerequisites, awaited once per suite
    - start_new      : fresh state
    - start          : resume an existing instance
    - stop           : terminate
    """

    async def init(self, *args: Any, **kwargs: Any) -> Any: ...

    async def compile(self) -> Any: ...

    async def start_new(self) -> Any: ...

    async def start(self) -> Any: ...

    async def stop(self) -> Any: ...


class PeeredProcess(ManagedProcess, Protocol):
    def set_peer_seeds(self, addresses: Sequence[str]) -> None: ...


class NodeClient(Protocol):
    """gRPC client bound to a running base node (or seed node)."""

    async def mine_block_without_wallet(
        self,
        before_submit: BeforeSubmit | None,
        weight: int,
        on_error: OnError | None,
    ) -> Any: ...

    async def submit_block(self, block: Any) -> Any: ...


class ProxyClient(Protocol):
    async def mine_block(self, weight: int) -> Any: ...


class BaseNodeProcess(PeeredProcess, Protocol):
    def create_grpc_client(self) -> NodeClient: ...

    def peer_address(self) -> str: ...


class WalletProcess(PeeredProcess, Protocol):
    pass


class MergeMiningProxyProcess(ManagedProcess, Protocol):
    def create_client(self) -> ProxyClient: ...


class MiningNodeProcess(ManagedProcess, Protocol):
    pass


class ProcessFactory(Protocol):
    """
    The only place process wrappers get constructed.

    Concrete wrappers (command line, binaries, ports) live outside this
    package; the world and the suite setup depend on this seam alone.
    """

    def base_node(
        self,
        name: str,
        options: Mapping[str, Any] | None = None,
        log_config: str | None = None,
    ) -> BaseNodeProcess: ...

    def wallet(
        self,
        name: str,
        options: Mapping[str, Any] | None = None,
        log_config: str | None = None,
    ) -> WalletProcess: ...

    def merge_mining_proxy(
        self,
        name: str,
        base_node_address: str,
        wallet_address: str,
        log_config: str | None = None,
    ) -> MergeMiningProxyProcess: ...

    def mining_node(
        self,
        name: str,
        base_node_address: str,
        wallet_address: str,
    ) -> MiningNodeProcess: ...


# async action run against every node client by World.for_each_client_async
ClientAction = Callable[[NodeClient, str], Awaitable[Any]]
