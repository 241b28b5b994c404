import inspect
import logging
from typing import Callable, Dict, List, Optional, Type

from django.utils.module_loading import import_string

from navigation.exceptions import HandlerNotRegistered
from .base import ChildrenHandler

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Registry of children handlers.

    Menu items refer to handlers by a stable key. Class handlers and function
    handlers live in separate tables because items store them in separate
    columns. Keys not registered in code are looked up in
    ``DBMENU["HANDLERS"]`` (key -> dotted path) on first use.
    """

    def __init__(self):
        self._classes: Dict[str, Type[ChildrenHandler]] = {}
        self._functions: Dict[str, Callable] = {}

    def register_class(self, key: str, handler_class: Type[ChildrenHandler]) -> None:
        """
        Register a class handler.

        Args:
            key (str): Value stored in ``MenuItem.handler_class``
            handler_class (Type[ChildrenHandler]): The handler class
        """
        if not (inspect.isclass(handler_class) and issubclass(handler_class, ChildrenHandler)):
            raise TypeError(f"{handler_class!r} is not a ChildrenHandler subclass")
        self._classes[key] = handler_class
        logger.debug("Registered handler class: %s", key)

    def register_function(self, key: str, func: Callable) -> None:
        """
        Register a function handler.

        Args:
            key (str): Value stored in ``MenuItem.handler_function``
            func (Callable): Called with the current URL
        """
        if not callable(func):
            raise TypeError(f"{func!r} is not callable")
        self._functions[key] = func
        logger.debug("Registered handler function: %s", key)

    def unregister(self, key: str) -> None:
        self._classes.pop(key, None)
        self._functions.pop(key, None)

    def _from_settings(self, key: str, config) -> Optional[object]:
        path = (config.handlers if config is not None else {}).get(key)
        if not path:
            return None
        return import_string(path)

    def resolve_class(self, key: str, config=None) -> Type[ChildrenHandler]:
        if key not in self._classes:
            found = self._from_settings(key, config)
            if found is None:
                raise HandlerNotRegistered(key, "handler class")
            self.register_class(key, found)
        return self._classes[key]

    def resolve_function(self, key: str, config=None) -> Callable:
        if key not in self._functions:
            found = self._from_settings(key, config)
            if found is None:
                raise HandlerNotRegistered(key, "handler function")
            self.register_function(key, found)
        return self._functions[key]

    def list_handlers(self) -> List[str]:
        """
        List all registered handler keys.

        Returns:
            List[str]: Keys of registered classes and functions
        """
        return sorted(set(self._classes) | set(self._functions))


registry = HandlerRegistry()


def register_handler(key: str):
    """Class decorator: ``@register_handler("blog-archive")``."""
    def decorator(cls):
        registry.register_class(key, cls)
        return cls
    return decorator


def register_function(key: str):
    """Function decorator: ``@register_function("recent-posts")``."""
    def decorator(func):
        registry.register_function(key, func)
        return func
    return decorator
