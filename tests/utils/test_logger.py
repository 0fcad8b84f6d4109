#!filepath: tests/utils/test_logger.py
import asyncio

import pytest

from integration_world import init_logging, logs
from integration_world.config import LogConfig


def test_catch_reraises_and_logs(log_lines):
    @logs.catch("sync failed", log_time=False)
    def func():
        raise ValueError("bad")

    with pytest.raises(ValueError):
        func()

    assert any("[ERROR] func: sync failed" in line for line in log_lines)


def test_catch_async_returns_value_and_logs_time(log_lines):
    @logs.catch()
    async def func():
        return 42

    assert asyncio.run(func()) == 42
    assert any("[TIME] func took" in line for line in log_lines)


def test_catch_async_reraises(log_lines):
    @logs.catch("async failed")
    async def func():
        raise RuntimeError("bad")

    with pytest.raises(RuntimeError):
        asyncio.run(func())

    assert any("async failed" in line for line in log_lines)


def test_init_logging_writes_file(tmp_path):
    log_dir = tmp_path / "logs"

    init_logging(LogConfig(dir=str(log_dir), level="DEBUG"))
    logs.info("[World] hello file sink")
    logs.reset()

    files = list(log_dir.glob("*.log"))
    assert len(files) == 1
    assert "hello file sink" in files[0].read_text(encoding="utf-8")


def test_reset_is_idempotent():
    logs.reset()
    logs.reset()
