#!filepath: integration_world/world/world.py
from __future__ import annotations

import asyncio
import inspect
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence

from integration_world import logs
from integration_world.config.world_config import WorldConfig
from integration_world.processes.base import (
    BaseNodeProcess,
    BeforeSubmit,
    ClientAction,
    MergeMiningProxyProcess,
    MiningNodeProcess,
    NodeClient,
    OnError,
    ProcessFactory,
    WalletProcess,
)
from integration_world.utils.errors import UnknownEntityError
from integration_world.world.fanout import join_all
from integration_world.world.registry import EntityRegistry


def _as_address_list(addresses: str | Sequence[str]) -> list[str]:
    if isinstance(addresses, str):
        return [addresses]
    return list(addresses)


def _block_payload(artifact: Any) -> Any:
    """A saved mining result carries the block under `block`; bare blocks pass through."""
    if isinstance(artifact, Mapping):
        return artifact["block"] if "block" in artifact else artifact
    return getattr(artifact, "block", artifact)


class World:
    """
    World = the one mutable context of a scenario

    Design principles:
    - built fresh per scenario by the runner, handed to every step
    - owns every process it starts until scenario_teardown()
    - processes are only constructed through the ProcessFactory
    - lookups return None for unknown names; dispatch raises
    """

    def __init__(self, factory: ProcessFactory, config: WorldConfig | None = None):
        self.factory = factory
        self.config = config or WorldConfig()

        # -------------------------
        # process registries
        # -------------------------
        self.seeds: EntityRegistry[BaseNodeProcess] = EntityRegistry("seed")
        self.nodes: EntityRegistry[BaseNodeProcess] = EntityRegistry("node")
        self.proxies: EntityRegistry[MergeMiningProxyProcess] = EntityRegistry("proxy")
        self.miners: EntityRegistry[MiningNodeProcess] = EntityRegistry("miner")
        self.wallets: EntityRegistry[WalletProcess] = EntityRegistry("wallet")
        self.clients: EntityRegistry[NodeClient] = EntityRegistry("client")

        # -------------------------
        # artifacts recorded by steps
        # -------------------------
        self.blocks: Dict[str, Any] = {}
        self.outputs: Dict[str, Any] = {}
        self.headers: Dict[str, Any] = {}
        self.transactions: Dict[str, Any] = {}
        self.peers: Dict[str, Any] = {}
        self.transactions_map: Dict[str, List[str]] = {}

        # wallets being started by get_or_create_wallet, one task per name
        self._pending_wallets: Dict[str, asyncio.Task] = {}

        # -------------------------
        # scenario scratch state
        # -------------------------
        self.testrun = f"run{int(time.time() * 1000)}"
        self.last_result: Any = None
        self.result_stack: List[Any] = []
        self.tip_height = 0

    @classmethod
    def from_parameters(
        cls,
        factory: ProcessFactory,
        parameters: Mapping[str, Any] | None = None,
    ) -> "World":
        return cls(factory, WorldConfig.from_parameters(parameters))

    # --------------------------------------------------
    # seeds / nodes
    # --------------------------------------------------
    async def create_seed_node(self, name: str) -> BaseNodeProcess:
        proc = self.factory.base_node(
            f"seed-{name}", None, self.config.log_files.base_node
        )
        await proc.start_new()
        try:
            client = proc.create_grpc_client()
        except Exception:
            # unregistered, so teardown would never reach it
            await proc.stop()
            raise
        self.seeds.add(name, proc)
        self.clients.add(name, client)
        logs.info(f"[World] seed node {name} started")
        return proc

    def seed_addresses(self) -> list[str]:
        return [seed.peer_address() for seed in self.seeds.values()]

    def create_node(
        self, name: str, options: Mapping[str, Any] | None = None
    ) -> BaseNodeProcess:
        """Construct only. Nothing is registered or started."""
        return self.factory.base_node(name, options, self.config.log_files.base_node)

    async def create_and_add_node(
        self, name: str, addresses: str | Sequence[str]
    ) -> BaseNodeProcess:
        node = self.create_node(name)
        node.set_peer_seeds(_as_address_list(addresses))
        await node.start_new()
        self.add_node(name, node)
        logs.info(f"[World] node {name} started")
        return node

    def add_node(self, name: str, process: BaseNodeProcess) -> None:
        # client first: a failure must leave neither registry touched
        client = process.create_grpc_client()
        self.nodes.add(name, process)
        self.clients.add(name, client)

    def get_node(self, name: str) -> Optional[BaseNodeProcess]:
        node = self.nodes.get(name)
        return node if node is not None else self.seeds.get(name)

    def get_client(self, name: str) -> Optional[NodeClient]:
        return self.clients.get(name)

    def _require_node(self, name: str) -> BaseNodeProcess:
        node = self.seeds.get(name)
        if node is None:
            node = self.nodes.get(name)
        if node is None:
            raise UnknownEntityError("node", name)
        return node

    async def stop_node(self, name: str) -> None:
        await self._require_node(name).stop()

    async def start_node(self, name: str) -> None:
        await self._require_node(name).start()

    # --------------------------------------------------
    # miners / proxies
    # --------------------------------------------------
    def add_mining_node(self, name: str, process: MiningNodeProcess) -> None:
        self.miners.add(name, process)

    def get_mining_node(self, name: str) -> Optional[MiningNodeProcess]:
        return self.miners.get(name)

    def add_proxy(self, name: str, process: MergeMiningProxyProcess) -> None:
        self.proxies.add(name, process)

    def get_proxy(self, name: str) -> Optional[MergeMiningProxyProcess]:
        return self.proxies.get(name)

    # --------------------------------------------------
    # wallets
    # --------------------------------------------------
    async def create_and_add_wallet(
        self, name: str, node_addresses: str | Sequence[str]
    ) -> WalletProcess:
        wallet = self.factory.wallet(name, {}, self.config.log_files.wallet)
        wallet.set_peer_seeds(_as_address_list(node_addresses))
        await wallet.start_new()
        self.add_wallet(name, wallet)
        logs.info(f"[World] wallet {name} started")
        return wallet

    def add_wallet(self, name: str, process: WalletProcess) -> None:
        self.wallets.add(name, process)

    def get_wallet(self, name: str) -> Optional[WalletProcess]:
        return self.wallets.get(name)

    async def get_or_create_wallet(self, name: str) -> WalletProcess:
        """
        Side effect: an unknown name starts a new wallet peered to every
        seed currently registered, and registers it under `name`.

        Overlapping calls for the same name share one start.
        """
        wallet = self.get_wallet(name)
        if wallet is not None:
            return wallet

        task = self._pending_wallets.get(name)
        if task is None:
            task = asyncio.ensure_future(
                self.create_and_add_wallet(name, self.seed_addresses())
            )
            self._pending_wallets[name] = task
            task.add_done_callback(lambda t: self._forget_pending_wallet(name, t))
        return await task

    def _forget_pending_wallet(self, name: str, task: asyncio.Task) -> None:
        if self._pending_wallets.get(name) is task:
            del self._pending_wallets[name]

    # --------------------------------------------------
    # artifacts
    # --------------------------------------------------
    def add_output(self, name: str, output: Any) -> None:
        self.outputs[name] = output

    def save_block(self, name: str, block: Any) -> None:
        self.blocks[name] = block

    def add_transaction(self, pub_key: str, tx_id: str) -> None:
        self.transactions_map.setdefault(pub_key, []).append(tx_id)

    def transactions_for(self, pub_key: str) -> list[str]:
        return list(self.transactions_map.get(pub_key, []))

    # --------------------------------------------------
    # mining / submission
    # --------------------------------------------------
    async def mine_block(
        self,
        name: str,
        weight: int,
        before_submit: BeforeSubmit | None = None,
        on_error: OnError | None = None,
    ) -> Any:
        client = self.get_client(name)
        if client is None:
            raise UnknownEntityError("client", name)
        return await client.mine_block_without_wallet(before_submit, weight, on_error)

    async def merge_mine_block(self, name: str, weight: int) -> Any:
        proxy = self.get_proxy(name)
        if proxy is None:
            raise UnknownEntityError("proxy", name)
        client = proxy.create_client()
        return await client.mine_block(weight)

    async def submit_block(self, block_name: str, node_name: str) -> None:
        """
        Submission failures are a test outcome, not a harness error:
        they are logged and the call returns normally.
        """
        try:
            client = self.get_client(node_name)
            if client is None:
                raise UnknownEntityError("client", node_name)
            if block_name not in self.blocks:
                raise UnknownEntityError("block", block_name)
            await client.submit_block(_block_payload(self.blocks[block_name]))
        except Exception as e:
            logs.error(f"[World] submit block {block_name} to {node_name} failed: {e!r}")

    # --------------------------------------------------
    # fan-out
    # --------------------------------------------------
    async def for_each_client_async(self, action: ClientAction) -> None:
        """
        action(client, name) for every seed then every node, all at once.
        Raises if any invocation failed.
        """
        names = self.seeds.names() + self.nodes.names()

        pending = []
        try:
            for name in names:
                pending.append(action(self.get_client(name), name))
        except Exception:
            # nothing was scheduled yet; drop what was built
            for coro in pending:
                if inspect.iscoroutine(coro):
                    coro.close()
            raise

        await join_all("for_each_client", pending)
