import uuid

from django.db import models

from flattree.models import AL_TreeEntity


class DescMixin(models.Model):
    """
    Model with desc field, handy for identifying objects in tests
    """

    desc = models.CharField(max_length=255)

    def __str__(self):
        return self.desc

    class Meta:
        abstract = True


class AL_TestEntity(AL_TreeEntity, DescMixin):
    parent = models.ForeignKey(
        "self",
        related_name="children_set",
        null=True,
        db_index=True,
        on_delete=models.CASCADE,
    )
    sib_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sib_order", "pk"]


class AL_TestEntity_Proxy(AL_TestEntity):
    class Meta:
        proxy = True


class AL_TestEntityCustomId(AL_TreeEntity, DescMixin):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    parent = models.ForeignKey("self", null=True, on_delete=models.CASCADE)
    sub_list_attr = "nodes"


class AL_TestEntityNoParent(AL_TreeEntity, DescMixin):
    pass


BASE_MODELS = [AL_TestEntity, AL_TestEntityCustomId]
PROXY_MODELS = [AL_TestEntity_Proxy]
