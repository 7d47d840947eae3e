"""

    flattree.builder
    ----------------

    Base class shared by all the forest builders.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from flattree import conf
from flattree.exceptions import InvalidRecordError, MaxDepthExceeded

logger = logging.getLogger(__name__)


class ForestBuilder:
    """ Forest builder.

    Turns a flat collection of records, each referencing its parent by id,
    into a forest: the list of root records, each one with its children
    attached recursively. This class only knows the algorithm; the way ids,
    parent ids and children are read and written is left to the subclasses:

        - :class:`typed_tree.TypedTreeBuilder` (``TreeEntity`` records)
        - :class:`config_tree.ConfigurableTreeBuilder` (configured fields)
        - :class:`map_tree.MapTreeBuilder` (string-keyed mappings)

    Records are not copied. Their children slot is overwritten in place and
    the returned roots are the same objects that were passed in.

    :param indexed:

        If enabled, records are grouped by parent id once before the tree is
        built, instead of scanning the whole collection for every node. The
        result is the same, but every id must be hashable.
        Defaults to the ``FLATTREE_INDEXED`` setting.

    :param max_depth:

        Maximum depth a tree may reach, roots having depth 1. When exceeded,
        :exc:`MaxDepthExceeded` is raised. ``None`` means unbounded, in which
        case a cycle in the data ends in a ``RecursionError``.
        Defaults to the ``FLATTREE_MAX_DEPTH`` setting.
    """

    def __init__(self, indexed: bool | None = None, max_depth: int | None = None):
        if indexed is None:
            indexed = conf.get_setting('INDEXED')
        if max_depth is None:
            max_depth = conf.get_setting('MAX_DEPTH')
        self.indexed = indexed
        self.max_depth = max_depth

    def get_id(self, record: Any) -> Any:
        ":returns: the identity value of a record"
        raise NotImplementedError

    def get_parent_id(self, record: Any) -> Any:
        ":returns: the parent identity value of a record, or ``None``"
        raise NotImplementedError

    def set_children(self, record: Any, children: list[Any]) -> None:
        "Stores ``children`` in the record's children slot."
        raise NotImplementedError

    def is_root(self, record: Any, root_marker: Any) -> bool:
        """
        :returns: ``True`` if the record has no parent or if its parent id
            equals ``root_marker``
        """
        parent_id = self.get_parent_id(record)
        return parent_id is None or parent_id == root_marker

    def build(self, records: Iterable[Any], root_marker: Any = None) -> list[Any]:
        """
        :returns: A list of the root records, with all their descendants
            attached.

        :param records: The flat collection. Only read once.
        :param root_marker: Parent id value that also marks a root.
        """
        records = list(records)
        if not records:
            return []
        roots = [record for record in records if self.is_root(record, root_marker)]
        find_children = self._get_children_finder(records)
        for root in roots:
            self._fill(find_children, root, 1)
        logger.debug(
            '%s built %d roots from %d records',
            self.__class__.__name__, len(roots), len(records))
        return roots

    def _get_children_finder(self, records: list[Any]) -> Callable[[Any], list[Any]]:
        """
        :returns: A callable mapping a node id to the records whose parent
            id equals it, in input order.
        """
        if not self.indexed:
            def find_children(node_id):
                return [
                    record for record in records
                    if node_id == self.get_parent_id(record)]
            return find_children

        buckets: dict[Any, list[Any]] = {}
        for record in records:
            buckets.setdefault(self.get_parent_id(record), []).append(record)

        def find_children(node_id):
            # a fresh list per parent, nodes sharing an id get their own copy
            return list(buckets.get(node_id, ()))
        return find_children

    def _fill(self, find_children: Callable[[Any], list[Any]], node: Any, depth: int) -> Any:
        "Recursively attaches the descendants of ``node``."
        if self.max_depth is not None and depth > self.max_depth:
            raise MaxDepthExceeded(
                'Tree deeper than %d levels at %r, is there a cycle?' % (
                    self.max_depth, node))
        node_id = self.get_id(node)
        if node_id is None:
            raise InvalidRecordError('Record %r has no id' % (node,))
        children = find_children(node_id)
        for child in children:
            self._fill(find_children, child, depth + 1)
        self.set_children(node, children)
        return node
