"""

    flattree.models
    ---------------

    Django models whose flat query results can be assembled into forests.

"""

from __future__ import annotations

import logging
from typing import Any

from django.core import serializers
from django.db import models

from flattree.fields import find_parent_field
from flattree.typed_tree import TreeEntity, TypedTreeBuilder
from flattree.types import BulkNodeData

logger = logging.getLogger(__name__)


class TreeEntityQuerySet(models.QuerySet):
    "Queryset able to assemble its rows into a forest."

    def as_forest(self, root_marker: Any = None, **options: Any) -> list[AL_TreeEntity]:
        """
        :returns: A *list* of the root nodes found in the queryset, with
            their descendants attached. The queryset is evaluated once and
            no further queries are made.

        Nodes whose parent isn't part of the queryset are only returned
        when their parent id equals ``root_marker``. The queryset ordering
        is kept among siblings.

        :param options: Passed to :class:`TypedTreeBuilder`.
        """
        nodes = list(self)
        logger.debug('Assembling %d %s rows', len(nodes), self.model.__name__)
        return TypedTreeBuilder(**options).build_forest(nodes, root_marker)


TreeEntityManager = models.Manager.from_queryset(TreeEntityQuerySet)


class AL_TreeEntity(TreeEntity, models.Model):
    """
    Abstract model to assemble Adjacency List trees in memory.

    The concrete model must declare a nullable foreign key to ``self``::

        class Category(AL_TreeEntity):
            parent = models.ForeignKey(
                'self', null=True, blank=True, on_delete=models.CASCADE)
            name = models.CharField(max_length=255)

        roots = Category.get_forest()

    Children are stored in the (non database) attribute named by
    :attr:`sub_list_attr`.
    """

    objects = TreeEntityManager()
    sub_list_attr = 'sub_list'

    @classmethod
    def get_parent_field(cls) -> models.ForeignKey:
        ":returns: the foreign key to ``self``"
        field = find_parent_field(cls)
        if field is None:
            raise TypeError(
                '%s needs a ForeignKey to self to be used as a tree' % (
                    cls.__name__,))
        return field

    @classmethod
    def get_parent_attname(cls) -> str:
        """
        :returns: the column name of the foreign key to ``self``
            Caches the result in the class itself to help in loops.
        """
        try:
            # looked up in the class dict so proxies and subclasses
            # resolve their own field
            return cls.__dict__['_cached_parent_attname']
        except KeyError:
            pass
        attname = cls.get_parent_field().attname
        cls._cached_parent_attname = attname
        return attname

    def get_id(self):
        return self.pk

    def get_parent_id(self):
        # the raw column value, so no query is made
        return getattr(self, self.get_parent_attname())

    def get_children(self):
        return getattr(self, self.sub_list_attr, [])

    def set_children(self, children):
        setattr(self, self.sub_list_attr, children)

    @classmethod
    def get_forest(cls, root_marker: Any = None, **options: Any) -> list[AL_TreeEntity]:
        ":returns: A *list* of all the root nodes, children attached."
        return cls.objects.all().as_forest(root_marker, **options)

    @classmethod
    def dump_forest(cls, forest: list[AL_TreeEntity], keep_ids: bool = True) -> list[BulkNodeData]:
        """Dumps an assembled forest to a python data structure.

        :returns: A list of dictionaries with a ``data`` key holding the
            serialized fields, an ``id`` key when ``keep_ids`` is enabled,
            and a ``children`` key for nodes that have children.
        """
        parent_name = cls.get_parent_field().name

        def _dump(nodes):
            ret = []
            for node, pyobj in zip(nodes, serializers.serialize('python', nodes)):
                # django's serializer stores the attributes in 'fields'
                fields = pyobj['fields']
                del fields[parent_name]
                newobj: BulkNodeData = {'data': fields}
                if keep_ids:
                    newobj['id'] = pyobj['pk']
                children = node.get_children()
                if children:
                    newobj['children'] = _dump(children)
                ret.append(newobj)
            return ret

        return _dump(forest)

    class Meta:
        "Abstract model."
        abstract = True
