from .log_config import LogConfig
from .world_config import CompileConfig, LogFilesConfig, WorldConfig

__all__ = ["LogConfig", "LogFilesConfig", "CompileConfig", "WorldConfig"]
