"""Tests for field configuration and access"""

import dataclasses

import pytest

from flattree.exceptions import ConfigResolutionError, FieldAccessError
from flattree.fields import (
    AttributeAccessor,
    FieldNameConfig,
    MappingAccessor,
    TreeRole,
    accessor_for,
    enumerate_fields,
    find_parent_field,
    resolve_field_config,
    tree_field,
)
from tests import models


@dataclasses.dataclass
class Menu:
    key: int = tree_field(TreeRole.ID)
    parent_key: int | None = tree_field(TreeRole.PARENT_ID, default=None)
    title: str = dataclasses.field(default="", metadata={"label": "Title"})
    items: list = tree_field(TreeRole.SUB_LIST, default_factory=list, metadata={"label": "Items"})


@dataclasses.dataclass
class IncompleteMenu:
    key: int = tree_field(TreeRole.ID)
    parent_key: int | None = None
    items: list = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class AmbiguousMenu:
    key: int = tree_field(TreeRole.ID)
    code: str = tree_field(TreeRole.ID, default="")
    parent_key: int | None = tree_field(TreeRole.PARENT_ID, default=None)
    items: list = tree_field(TreeRole.SUB_LIST, default_factory=list)


@dataclasses.dataclass
class OverriddenMenu(Menu):
    code: str = ""
    tree_roles = {TreeRole.ID: "code"}


class Anything:
    pass


class TestFieldNameConfig:
    def test_field_for(self):
        config = FieldNameConfig("id", "parent_id", "children")
        assert config.field_for(TreeRole.ID) == "id"
        assert config.field_for(TreeRole.PARENT_ID) == "parent_id"
        assert config.field_for(TreeRole.SUB_LIST) == "children"

    def test_from_roles(self):
        config = FieldNameConfig.from_roles(
            {TreeRole.SUB_LIST: "c", TreeRole.ID: "a", TreeRole.PARENT_ID: "b"}
        )
        assert config == FieldNameConfig("a", "b", "c")

    def test_from_roles_missing(self):
        with pytest.raises(ConfigResolutionError, match="PARENT_ID, SUB_LIST"):
            FieldNameConfig.from_roles({TreeRole.ID: "a"})

    def test_immutable(self):
        config = FieldNameConfig("a", "b", "c")
        with pytest.raises(AttributeError):
            config.id_field = "x"


class TestEnumerateFields:
    def test_dataclass(self):
        assert enumerate_fields(Menu) == {
            "key": TreeRole.ID,
            "parent_key": TreeRole.PARENT_ID,
            "title": None,
            "items": TreeRole.SUB_LIST,
        }

    def test_tree_field_keeps_metadata(self):
        items = {f.name: f for f in dataclasses.fields(Menu)}["items"]
        assert items.metadata["label"] == "Items"

    def test_instance_and_class_agree(self):
        assert enumerate_fields(Menu(1)) == enumerate_fields(Menu)

    def test_model(self):
        assert enumerate_fields(models.AL_TestEntity) == {
            "id": TreeRole.ID,
            "parent_id": TreeRole.PARENT_ID,
            "sib_order": None,
            "desc": None,
            "sub_list": TreeRole.SUB_LIST,
        }

    def test_model_custom_sub_list(self):
        fields = enumerate_fields(models.AL_TestEntityCustomId)
        assert fields["nodes"] is TreeRole.SUB_LIST
        assert "sub_list" not in fields

    def test_proxy_model(self):
        assert enumerate_fields(models.AL_TestEntity_Proxy) == enumerate_fields(models.AL_TestEntity)

    def test_model_without_parent(self):
        fields = enumerate_fields(models.AL_TestEntityNoParent)
        assert TreeRole.PARENT_ID not in fields.values()

    def test_mapping(self):
        assert enumerate_fields({"a": 1, "b": 2}) == {"a": None, "b": None}

    def test_tree_roles_override(self):
        fields = enumerate_fields(OverriddenMenu)
        assert fields["code"] is TreeRole.ID
        assert fields["key"] is None

    def test_unknown_schema(self):
        with pytest.raises(ConfigResolutionError):
            enumerate_fields(Anything())


class TestResolveFieldConfig:
    def test_dataclass(self):
        assert resolve_field_config(Menu(1)) == FieldNameConfig("key", "parent_key", "items")

    def test_model(self):
        node = models.AL_TestEntityCustomId()
        assert resolve_field_config(node) == FieldNameConfig("id", "parent_id", "nodes")

    def test_override(self):
        assert resolve_field_config(OverriddenMenu(1)) == FieldNameConfig(
            "code", "parent_key", "items"
        )

    def test_missing_roles(self):
        with pytest.raises(ConfigResolutionError):
            resolve_field_config(IncompleteMenu(1))

    def test_model_without_parent(self):
        with pytest.raises(ConfigResolutionError):
            resolve_field_config(models.AL_TestEntityNoParent())

    def test_duplicated_role(self):
        with pytest.raises(ConfigResolutionError, match="declared by both"):
            resolve_field_config(AmbiguousMenu(1))

    def test_mapping(self):
        with pytest.raises(ConfigResolutionError):
            resolve_field_config({"id": 1, "parent_id": None, "children": []})


class TestAccessors:
    def test_accessor_for(self):
        assert isinstance(accessor_for({}), MappingAccessor)
        assert isinstance(accessor_for(Menu(1)), AttributeAccessor)

    def test_mapping_get(self):
        assert MappingAccessor().get({"a": 1}, "a") == 1

    def test_mapping_get_missing(self):
        with pytest.raises(FieldAccessError):
            MappingAccessor().get({"a": 1}, "b")

    def test_mapping_set_new_key(self):
        record = {}
        MappingAccessor().set(record, "children", [])
        assert record == {"children": []}

    def test_attribute_get(self):
        assert AttributeAccessor().get(Menu(1, title="x"), "title") == "x"

    def test_attribute_get_missing(self):
        with pytest.raises(FieldAccessError):
            AttributeAccessor().get(Menu(1), "nope")

    def test_field_access_error_is_attribute_error(self):
        with pytest.raises(AttributeError):
            AttributeAccessor().get(Menu(1), "nope")

    def test_attribute_set_existing(self):
        menu = Menu(1)
        AttributeAccessor().set(menu, "items", [2])
        assert menu.items == [2]

    def test_attribute_set_declared(self):
        node = models.AL_TestEntity(id=1)
        AttributeAccessor().set(node, "sub_list", [])
        assert node.sub_list == []

    def test_attribute_set_undeclared(self):
        with pytest.raises(FieldAccessError):
            AttributeAccessor().set(Menu(1), "nope", 1)

    def test_attribute_set_on_unknown_schema(self):
        with pytest.raises(FieldAccessError):
            AttributeAccessor().set(Anything(), "nope", 1)


class TestFindParentField:
    def test_found(self):
        assert find_parent_field(models.AL_TestEntity).name == "parent"

    def test_proxy(self):
        assert find_parent_field(models.AL_TestEntity_Proxy).name == "parent"

    def test_missing(self):
        assert find_parent_field(models.AL_TestEntityNoParent) is None
