from .config import EditorConfig
from .log import configure_logging

__all__ = ["EditorConfig", "configure_logging"]
