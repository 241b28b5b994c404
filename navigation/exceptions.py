class NavigationError(Exception):
    """Base class for unexpected navigation failures."""


class HandlerNotRegistered(NavigationError, LookupError):
    """A menu item names a children handler nobody registered."""

    def __init__(self, key: str, kind: str = "handler"):
        self.key = key
        self.kind = kind
        super().__init__(f"No {kind} registered under {key!r}")


class MenuCycleError(NavigationError):
    """The parent chain of a menu item loops back onto itself."""

    def __init__(self, item_id, path):
        self.item_id = item_id
        self.path = list(path)
        chain = " -> ".join(str(p) for p in self.path + [item_id])
        super().__init__(f"Menu item {item_id} is its own ancestor ({chain})")
