"String-keyed records"

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Iterable

from django.db import models

from flattree.builder import ForestBuilder
from flattree.exceptions import FieldAccessError


def record_to_dict(record: Any) -> Mapping[str, Any]:
    """
    :returns: the fields of a record as a string-keyed mapping

        - mappings are returned as they are
        - Django model instances give their concrete fields, keyed by
          ``attname`` (``parent_id``, not ``parent``)
        - dataclass instances give their fields, without recursing
        - any other object gives a copy of its public attributes

    :raise FieldAccessError: when the record has no readable fields
    """
    if isinstance(record, Mapping):
        return record
    if isinstance(record, models.Model):
        return {
            field.attname: getattr(record, field.attname)
            for field in record._meta.concrete_fields}
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return {
            field.name: getattr(record, field.name)
            for field in dataclasses.fields(record)}
    try:
        attrs = vars(record)
    except TypeError:
        raise FieldAccessError("Can't read the fields of %r" % (record,)) from None
    return {k: v for k, v in attrs.items() if not k.startswith('_')}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class MapTreeBuilder(ForestBuilder):
    """
    Builds forests of string-keyed mappings, children being stored under
    ``children_key``.

    Unlike the other builders, a missing or blank parent id never makes a
    root: only records whose parent id, as a string, equals the requested
    root value are returned. Everything else only shows up as a descendant.
    """

    def __init__(
        self,
        id_key: str = 'id',
        parent_id_key: str = 'parent_id',
        children_key: str = 'children',
        indexed: bool | None = None,
        max_depth: int | None = None,
    ):
        super().__init__(indexed=indexed, max_depth=max_depth)
        self.id_key = id_key
        self.parent_id_key = parent_id_key
        self.children_key = children_key

    def get_id(self, record):
        return record.get(self.id_key)

    def get_parent_id(self, record):
        return record.get(self.parent_id_key)

    def set_children(self, record, children):
        record[self.children_key] = children

    def is_root(self, record, root_marker):
        parent_id = self.get_parent_id(record)
        if _is_blank(parent_id):
            return False
        return str(parent_id) == root_marker

    def build_map_forest(self, records: Iterable[Any], root_value: str) -> list[Mapping[str, Any]]:
        """
        :returns: A list of the records whose parent id is ``root_value``
            once turned into a string, with their descendants attached.
            Children are matched on raw values, not strings.

        :param records: Mappings, which are modified in place, or objects
            converted with :func:`record_to_dict`.

        :raise TypeError: when ``root_value`` isn't a string and there are
            records to assemble
        :raise InvalidRecordError: when a record reached as a parent has no
            id
        """
        records = [record_to_dict(record) for record in records]
        if not records:
            return []
        if not isinstance(root_value, str):
            raise TypeError('root_value must be a string, not %r' % (
                type(root_value).__name__,))
        return self.build(records, root_value)


def build_map_forest(
    records: Iterable[Any],
    root_value: str,
    id_key: str = 'id',
    parent_id_key: str = 'parent_id',
    children_key: str = 'children',
    **options: Any,
) -> list[Mapping[str, Any]]:
    "Shortcut for ``MapTreeBuilder(...).build_map_forest(records, root_value)``"
    builder = MapTreeBuilder(id_key, parent_id_key, children_key, **options)
    return builder.build_map_forest(records, root_value)
