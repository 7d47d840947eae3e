"Records with typed accessors"

from __future__ import annotations

from typing import Any, Iterable

from flattree.builder import ForestBuilder


class TreeEntity:
    """ Tree entity.

    Defines the accessors a record needs to be assembled by
    :class:`TypedTreeBuilder`. Subclasses must implement all four methods,
    or inherit them from :class:`flattree.models.AL_TreeEntity`.

    Example::

        class Category(TreeEntity):
            def __init__(self, id, parent_id=None):
                self.id, self.parent_id, self.sub_list = id, parent_id, []

            def get_id(self):
                return self.id

            def get_parent_id(self):
                return self.parent_id

            def get_children(self):
                return self.sub_list

            def set_children(self, children):
                self.sub_list = children
    """

    def get_id(self) -> Any:
        ":returns: the identity of the record, ``None`` if not assigned yet"
        raise NotImplementedError

    def get_parent_id(self) -> Any:
        ":returns: the identity of the parent record, or ``None``"
        raise NotImplementedError

    def get_children(self) -> list[Any]:
        ":returns: the children attached by the last build"
        raise NotImplementedError

    def set_children(self, children: list[Any]) -> None:
        "Replaces the children of the record."
        raise NotImplementedError


class TypedTreeBuilder(ForestBuilder):
    "Builds forests of :class:`TreeEntity` records."

    def get_id(self, record):
        return record.get_id()

    def get_parent_id(self, record):
        return record.get_parent_id()

    def set_children(self, record, children):
        record.set_children(children)

    def build_forest(self, records: Iterable[TreeEntity], root_marker: Any = None) -> list[TreeEntity]:
        """
        :returns: A list of the root records, every one of them with its
            descendants attached through :meth:`TreeEntity.set_children`.

        A record is a root when its parent id is ``None`` or equals
        ``root_marker``.

        :raise InvalidRecordError: when a record reached as a parent has no
            id
        """
        return self.build(records, root_marker)


def build_forest(records: Iterable[TreeEntity], root_marker: Any = None, **options: Any) -> list[TreeEntity]:
    "Shortcut for ``TypedTreeBuilder(**options).build_forest(...)``"
    return TypedTreeBuilder(**options).build_forest(records, root_marker)
