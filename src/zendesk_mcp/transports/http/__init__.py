from .app import build_http_app, build_session_manager
from .config import HttpConfig

__all__ = ["HttpConfig", "build_http_app", "build_session_manager"]
