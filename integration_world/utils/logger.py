#!filepath: integration_world/utils/logger.py
import inspect
import os
from contextlib import suppress
from functools import wraps
from time import perf_counter
from typing import Callable

from loguru import logger


class Logging:
    """
    Harness logging facade
    ---------------------------------------
    - thin wrapper over the global loguru logger
    - optional rotating file sink (configure once per run)
    - exception/timing decorator for sync and async callables
    ---------------------------------------
    """

    def __init__(self):
        self._file_sink_id: int | None = None
        self.log_dir: str | None = None

    def configure(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        level: str = "INFO",
    ) -> None:
        """
        Install the file sink. Calling again replaces the previous file sink
        instead of stacking another one.
        """
        os.makedirs(log_dir, exist_ok=True)

        self.reset()

        self._file_sink_id = logger.add(
            sink=f"{log_dir}/{{time:YYYY-MM-DD}}.log",
            rotation=rotation,
            retention=retention,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            enqueue=True,
            backtrace=True,
            diagnose=True,
        )
        self.log_dir = log_dir

        logger.info("\n-----------Logger initialized successfully.-----------")

    def reset(self) -> None:
        """Drop the file sink (flushes queued records)."""
        if self._file_sink_id is None:
            return
        # already gone if someone called logger.remove()
        with suppress(ValueError):
            logger.remove(self._file_sink_id)
        self._file_sink_id = None

    # ---------- logging methods ----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- decorator ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_time: bool = True,
    ) -> Callable:
        """
        Log any exception with traceback and re-raise it.

        Works for both plain functions and coroutine functions:

            @logs.catch("compile failed")
            async def compile_all(...):
                ...
        """

        def decorator(func: Callable):
            if inspect.iscoroutinefunction(func):
                @wraps(func)
                async def async_wrapper(*args, **kwargs):
                    start = perf_counter()
                    try:
                        result = await func(*args, **kwargs)
                    except Exception:
                        logger.exception(f"[ERROR] {func.__name__}: {msg}")
                        raise

                    if log_time:
                        cost = perf_counter() - start
                        logger.info(f"[TIME] {func.__name__} took {cost:.4f}s")
                    return result

                return async_wrapper

            @wraps(func)
            def wrapper(*args, **kwargs):
                start = perf_counter()
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_time:
                    cost = perf_counter() - start
                    logger.info(f"[TIME] {func.__name__} took {cost:.4f}s")
                return result

            return wrapper

        return decorator


# default global logs (stderr only until configure() is called)
logs = Logging()


def init_logging(cfg) -> Logging:
    """
    Configure the global logs from a LogConfig (dir / rotation / retention / level).
    """
    logs.configure(
        log_dir=cfg.dir,
        rotation=cfg.rotation,
        retention=cfg.retention,
        level=cfg.level,
    )
    return logs
