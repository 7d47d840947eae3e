"""

    flattree.fields
    ---------------

    Field name configuration, declared field enumeration and field access
    for records whose tree fields are only known at runtime.

"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping, MutableMapping
from typing import Any, NamedTuple

from django.db import models

from flattree.exceptions import ConfigResolutionError, FieldAccessError

TREE_ROLE_METADATA = 'tree_role'


class TreeRole(enum.Enum):
    "Logical roles a field can play in a tree."

    ID = 'id'
    PARENT_ID = 'parent_id'
    SUB_LIST = 'sub_list'


class FieldNameConfig(NamedTuple):
    """
    Names of the fields carrying the identity, the parent identity and the
    children of a record. Build one per record schema and reuse it.
    """

    id_field: str
    parent_id_field: str
    sub_list_field: str

    def field_for(self, role: TreeRole) -> str:
        ":returns: the field name mapped to ``role``"
        return {
            TreeRole.ID: self.id_field,
            TreeRole.PARENT_ID: self.parent_id_field,
            TreeRole.SUB_LIST: self.sub_list_field,
        }[role]

    @classmethod
    def from_roles(cls, roles: Mapping[TreeRole, str]) -> FieldNameConfig:
        """
        :returns: a config built from a ``{TreeRole: field name}`` mapping

        :raise ConfigResolutionError: when a role is missing
        """
        missing = [role.name for role in TreeRole if role not in roles]
        if missing:
            raise ConfigResolutionError(
                'No field declared for role(s): %s' % ', '.join(missing))
        return cls(
            id_field=roles[TreeRole.ID],
            parent_id_field=roles[TreeRole.PARENT_ID],
            sub_list_field=roles[TreeRole.SUB_LIST],
        )


def tree_field(role: TreeRole, **kwargs: Any) -> Any:
    """
    Declares a dataclass field playing a tree role::

        @dataclasses.dataclass
        class Category:
            code: str = tree_field(TreeRole.ID)
            parent_code: str | None = tree_field(TreeRole.PARENT_ID, default=None)
            nodes: list = tree_field(TreeRole.SUB_LIST, default_factory=list)

    Any other keyword argument is passed to :func:`dataclasses.field`.
    """
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[TREE_ROLE_METADATA] = role
    return dataclasses.field(metadata=metadata, **kwargs)


def _is_model(obj: Any) -> bool:
    if isinstance(obj, type):
        return issubclass(obj, models.Model)
    return isinstance(obj, models.Model)


def find_parent_field(model: type[models.Model]) -> models.ForeignKey | None:
    ":returns: the first foreign key of ``model`` pointing to itself"
    for field in model._meta.concrete_fields:
        if field.many_to_one and \
                field.related_model is model._meta.concrete_model:
            return field
    return None


def _enumerate_model_fields(model: type[models.Model]) -> dict[str, TreeRole | None]:
    ret: dict[str, TreeRole | None] = {
        field.attname: None for field in model._meta.concrete_fields}
    ret[model._meta.pk.attname] = TreeRole.ID
    parent_field = find_parent_field(model)
    if parent_field is not None:
        ret[parent_field.attname] = TreeRole.PARENT_ID
    sub_list_attr = getattr(model, 'sub_list_attr', None)
    if sub_list_attr:
        ret[sub_list_attr] = TreeRole.SUB_LIST
    return ret


def enumerate_fields(obj: Any) -> dict[str, TreeRole | None]:
    """
    :returns: the declared field names of a record (or record class), in
        declaration order, mapped to the tree role each one plays, or
        ``None``.

    Roles come from:

        - dataclasses: the metadata set by :func:`tree_field`
        - Django models: the primary key, the foreign key to ``self`` and
          the ``sub_list_attr`` class attribute
        - mappings: keys are enumerated, no roles are declared

    Any class may also declare or override roles with a ``tree_roles``
    attribute mapping :class:`TreeRole` members to field names.

    :raise ConfigResolutionError: when the schema can't be enumerated
    """
    cls = obj if isinstance(obj, type) else type(obj)
    if dataclasses.is_dataclass(obj):
        ret = {
            field.name: field.metadata.get(TREE_ROLE_METADATA)
            for field in dataclasses.fields(obj)}
    elif _is_model(obj):
        ret = _enumerate_model_fields(cls)
    elif isinstance(obj, Mapping):
        ret = dict.fromkeys(obj)
    elif hasattr(cls, 'tree_roles'):
        ret = {}
    else:
        raise ConfigResolutionError(
            "Can't enumerate the declared fields of %r" % (cls,))

    tree_roles = getattr(cls, 'tree_roles', None) or {}
    for role, name in tree_roles.items():
        # an override takes the role away from whatever field had it
        for field_name, field_role in ret.items():
            if field_role is role:
                ret[field_name] = None
        ret[name] = role
    return ret


def resolve_field_config(sample: Any) -> FieldNameConfig:
    """
    :returns: the :class:`FieldNameConfig` declared by a representative
        record's schema

    :raise ConfigResolutionError: when a role is missing or declared by
        more than one field
    """
    roles: dict[TreeRole, str] = {}
    for name, role in enumerate_fields(sample).items():
        if role is None:
            continue
        if role in roles:
            raise ConfigResolutionError(
                'Role %s declared by both %r and %r on %r' % (
                    role.name, roles[role], name, type(sample)))
        roles[role] = name
    return FieldNameConfig.from_roles(roles)


class FieldAccessor:
    "Reads and writes named fields on records."

    def get(self, record: Any, field_name: str) -> Any:
        raise NotImplementedError

    def set(self, record: Any, field_name: str, value: Any) -> None:
        raise NotImplementedError


class MappingAccessor(FieldAccessor):
    "Accessor for string-keyed mappings."

    def get(self, record, field_name):
        try:
            return record[field_name]
        except KeyError:
            raise FieldAccessError(
                'Record %r has no key %r' % (record, field_name)) from None

    def set(self, record, field_name, value):
        if not isinstance(record, MutableMapping):
            raise FieldAccessError(
                "Can't set key %r on read-only mapping %r" % (field_name, record))
        record[field_name] = value


class AttributeAccessor(FieldAccessor):
    """
    Accessor for objects exposing their fields as attributes: dataclasses,
    Django model instances and plain objects.

    Only existing attributes and declared fields can be written.
    """

    def get(self, record, field_name):
        try:
            return getattr(record, field_name)
        except AttributeError:
            raise FieldAccessError(
                'Record %r has no field %r' % (record, field_name)) from None

    def set(self, record, field_name, value):
        if not hasattr(record, field_name) and \
                field_name not in self._declared(record):
            raise FieldAccessError(
                'Record %r has no field %r' % (record, field_name))
        try:
            setattr(record, field_name, value)
        except AttributeError as exc:
            raise FieldAccessError(
                "Can't set field %r on %r: %s" % (field_name, record, exc)) from exc

    def _declared(self, record):
        try:
            return enumerate_fields(record)
        except ConfigResolutionError:
            return {}


MAPPING_ACCESSOR = MappingAccessor()
ATTRIBUTE_ACCESSOR = AttributeAccessor()


def accessor_for(record: Any) -> FieldAccessor:
    ":returns: the default accessor for a record"
    if isinstance(record, Mapping):
        return MAPPING_ACCESSOR
    return ATTRIBUTE_ACCESSOR
