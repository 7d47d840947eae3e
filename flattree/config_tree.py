"Records with configured field names"

from __future__ import annotations

import logging
from typing import Any, Iterable

from flattree.builder import ForestBuilder
from flattree.fields import FieldAccessor, FieldNameConfig, accessor_for, resolve_field_config

logger = logging.getLogger(__name__)


class ConfigurableTreeBuilder(ForestBuilder):
    """
    Builds forests of generic records (mappings, dataclasses, Django model
    instances...), reading and writing the tree fields named by a
    :class:`FieldNameConfig` through a :class:`FieldAccessor`.

    :param config: Default field names. When missing they are resolved from
        the first record of every build, see
        :func:`flattree.fields.resolve_field_config`.

    :param accessor: Accessor used for every record. When missing it is
        picked per record by :func:`flattree.fields.accessor_for`.
    """

    def __init__(
        self,
        config: FieldNameConfig | None = None,
        accessor: FieldAccessor | None = None,
        indexed: bool | None = None,
        max_depth: int | None = None,
    ):
        super().__init__(indexed=indexed, max_depth=max_depth)
        self.config = config
        self.accessor = accessor

    def _get_accessor(self, record):
        return self.accessor or accessor_for(record)

    def get_id(self, record):
        return self._get_accessor(record).get(record, self.config.id_field)

    def get_parent_id(self, record):
        return self._get_accessor(record).get(record, self.config.parent_id_field)

    def set_children(self, record, children):
        self._get_accessor(record).set(record, self.config.sub_list_field, children)

    def with_config(self, config: FieldNameConfig) -> ConfigurableTreeBuilder:
        ":returns: a builder with the same options reading ``config``"
        if config == self.config:
            return self
        return self.__class__(
            config=config, accessor=self.accessor,
            indexed=self.indexed, max_depth=self.max_depth)

    def build_forest(
        self,
        records: Iterable[Any],
        root_marker: Any = None,
        config: FieldNameConfig | None = None,
    ) -> list[Any]:
        """
        :returns: A list of the root records, every one of them with its
            descendants stored in ``config.sub_list_field``.

        :param config: Field names for this call only. Takes precedence over
            the builder's config.

        :raise ConfigResolutionError: when no config is given and the first
            record's schema doesn't declare every role
        :raise FieldAccessError: when a record lacks a configured field
        :raise InvalidRecordError: when a record reached as a parent has no
            id
        """
        records = list(records)
        if not records:
            return []
        config = config or self.config
        if config is None:
            config = resolve_field_config(records[0])
            logger.debug('Resolved %r from %r', config, type(records[0]))
        return self.with_config(config).build(records, root_marker)


def build_forest(
    records: Iterable[Any],
    root_marker: Any = None,
    config: FieldNameConfig | None = None,
    **options: Any,
) -> list[Any]:
    "Shortcut for ``ConfigurableTreeBuilder(**options).build_forest(...)``"
    return ConfigurableTreeBuilder(**options).build_forest(records, root_marker, config)
