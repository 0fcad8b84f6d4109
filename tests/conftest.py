# tests/conftest.py
from __future__ import annotations

from typing import Any

import pytest
from loguru import logger

from integration_world import World, WorldConfig


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture
def log_lines():
    """Collect every loguru message emitted during the test."""
    captured: list[str] = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))
    yield captured
    logger.remove(sink_id)


# =============================================================================
# Fake collaborators
# =============================================================================

class FakeNodeClient:
    def __init__(self, owner: str):
        self.owner = owner
        self.mined: list[tuple[Any, int, Any]] = []
        self.submitted: list[Any] = []
        self.submit_error: Exception | None = None

    async def mine_block_without_wallet(self, before_submit, weight, on_error):
        self.mined.append((before_submit, weight, on_error))
        return {"block": f"{self.owner}-block-{len(self.mined)}"}

    async def submit_block(self, block):
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append(block)


class FakeProxyClient:
    def __init__(self, owner: str):
        self.owner = owner
        self.weights: list[int] = []

    async def mine_block(self, weight):
        self.weights.append(weight)
        return f"{self.owner}-merged-{weight}"


class FakeProcess:
    """
    Records every lifecycle call into a journal shared with its factory.
    """

    def __init__(self, kind: str, name: str, journal: list, **ctor):
        self.kind = kind
        self.name = name
        self.ctor = ctor
        self.journal = journal
        self.peer_seeds: list[str] | None = None
        self.running = False
        self.stop_error: Exception | None = None
        self.clients: list[Any] = []

    def _record(self, event: str, *extra):
        self.journal.append((self.kind, self.name, event, *extra))

    async def init(self, *args, **kwargs):
        self._record("init", kwargs)

    async def compile(self):
        self._record("compile")

    async def start_new(self):
        self._record("start_new")
        self.running = True

    async def start(self):
        self._record("start")
        self.running = True

    async def stop(self):
        self._record("stop")
        if self.stop_error is not None:
            raise self.stop_error
        self.running = False

    def set_peer_seeds(self, addresses):
        self.peer_seeds = addresses

    def peer_address(self):
        return f"{self.name}@127.0.0.1"

    def create_grpc_client(self):
        client = FakeNodeClient(self.name)
        self.clients.append(client)
        return client

    def create_client(self):
        client = FakeProxyClient(self.name)
        self.clients.append(client)
        return client


class FakeFactory:
    def __init__(self):
        self.journal: list[tuple] = []
        self.created: list[FakeProcess] = []

    def _make(self, kind, name, **ctor) -> FakeProcess:
        proc = FakeProcess(kind, name, self.journal, **ctor)
        self.created.append(proc)
        return proc

    def base_node(self, name, options=None, log_config=None):
        return self._make("base_node", name, options=options, log_config=log_config)

    def wallet(self, name, options=None, log_config=None):
        return self._make("wallet", name, options=options, log_config=log_config)

    def merge_mining_proxy(self, name, base_node_address, wallet_address, log_config=None):
        return self._make(
            "mmproxy",
            name,
            base_node_address=base_node_address,
            wallet_address=wallet_address,
            log_config=log_config,
        )

    def mining_node(self, name, base_node_address, wallet_address):
        return self._make(
            "mining_node",
            name,
            base_node_address=base_node_address,
            wallet_address=wallet_address,
        )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def factory() -> FakeFactory:
    return FakeFactory()


@pytest.fixture
def make_process(factory):
    """
    Build a standalone fake process (not registered anywhere).

    Usage:
        proc = make_process("mmproxy", "proxyA")
    """

    def _make(kind: str, name: str) -> FakeProcess:
        return factory._make(kind, name)

    return _make


@pytest.fixture
def world(factory) -> World:
    return World(factory, WorldConfig())
