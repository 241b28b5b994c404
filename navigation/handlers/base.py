from abc import ABC, abstractmethod


class ChildrenHandler(ABC):
    """
    Supplies the children of a menu node instead of the rows below it.

    Subclasses are registered under a key and referenced from
    ``MenuItem.handler_class``. Whatever ``get_children`` returns is placed
    in the node's ``children`` unchanged.
    """

    def __init__(self, repository, config):
        self.repository = repository
        self.config = config

    @abstractmethod
    def get_children(self, current_url: str):
        """Return the children for the node, given the URL being rendered."""
