"""Core functionality for Stylecraft.

- **config**: Pydantic Settings configuration and ``load_config()``
- **errors**: Typed application errors
- **schema**: Shared pydantic models for records and requests
- **store**: In-memory record store
- **styles**: Style presets and styled-prompt composition
- **provider**: External image-generation provider clients
- **generation**: Generation service tying the above together
"""

from stylecraft.core.config import StylecraftConfig, load_config
from stylecraft.core.errors import ConfigError, ProviderError, StylecraftError, ValidationError
from stylecraft.core.generation import GenerationService
from stylecraft.core.store import MemoryStore, RecordStore

__all__ = [
    "ConfigError",
    "GenerationService",
    "MemoryStore",
    "ProviderError",
    "RecordStore",
    "StylecraftConfig",
    "StylecraftError",
    "ValidationError",
    "load_config",
]
