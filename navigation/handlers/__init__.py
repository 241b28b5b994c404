from .base import ChildrenHandler
from .registry import HandlerRegistry, registry, register_handler, register_function

__all__ = ["ChildrenHandler", "HandlerRegistry", "registry", "register_handler", "register_function"]
