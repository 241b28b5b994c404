from .cache import NavigationCache
from .repository import MenuItemRepository
from .tree import NavigationTree

__all__ = ["NavigationCache", "MenuItemRepository", "NavigationTree"]
