from transcipio_common.config import MinioConfig, RedisConfig
from transcipio_common.logging import setup_logging

__all__ = [
    "setup_logging",
    "MinioConfig",
    "RedisConfig",
]
