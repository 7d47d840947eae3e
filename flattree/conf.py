"""
Library settings.

Every setting is read from the Django settings module with a ``FLATTREE_``
prefix and falls back to :data:`DEFAULTS`, so the builders also work when
Django settings are not configured at all::

    FLATTREE_INDEXED = True
    FLATTREE_MAX_DEPTH = 64
"""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULTS = {
    # group records by parent id once instead of rescanning per node
    'INDEXED': False,
    # None means unbounded
    'MAX_DEPTH': None,
}


def get_setting(name):
    ":returns: the value of ``FLATTREE_<name>`` or its default."
    try:
        return getattr(settings, 'FLATTREE_' + name, DEFAULTS[name])
    except ImproperlyConfigured:
        return DEFAULTS[name]
