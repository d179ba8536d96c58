"""Query filters for article collections.

Every function takes a queryset and returns a new one, so they can be applied
to ``Article.objects`` or to any already-narrowed queryset. Functions that
depend on the current time take it as an explicit ``now`` argument.
"""

from collections.abc import Iterable

from django.db.models import Q


def filter_by_status(queryset, status):
    """Keep articles with the given status; empty status leaves the queryset as is."""
    if status:
        queryset = queryset.filter(status=status)
    return queryset


def filter_by_status_in(queryset, statuses):
    """Keep articles whose status is one of ``statuses``; an empty set is a no-op."""
    statuses = list(statuses or [])
    if statuses:
        queryset = queryset.filter(status__in=statuses)
    return queryset


def filter_published(queryset, now):
    """Keep articles whose publish window ``[start, stop)`` contains ``now``.

    A missing stop means the window never closes. A missing start never matches.
    """
    return queryset.filter(published_start__lte=now).filter(
        Q(published_stop__isnull=True) | Q(published_stop__gt=now)
    )


def filter_start_after(queryset, now):
    """Keep articles scheduled to start after ``now``."""
    return queryset.filter(published_start__gt=now)


def filter_stop_after(queryset, now):
    """Keep articles whose stop is after ``now``; a missing stop does not match."""
    return queryset.filter(published_stop__gt=now)


def filter_by_slug(queryset, slug):
    if slug:
        queryset = queryset.filter(slug=slug)
    return queryset


def filter_by_category(queryset, category):
    """Keep articles in one category id or in any of an iterable of ids."""
    if not category:
        return queryset
    if isinstance(category, Iterable) and not isinstance(category, (str, bytes)):
        ids = list(category)
        return queryset.filter(category_id__in=ids) if ids else queryset
    return queryset.filter(category_id=category)


__all__ = [
    "filter_by_status",
    "filter_by_status_in",
    "filter_published",
    "filter_start_after",
    "filter_stop_after",
    "filter_by_slug",
    "filter_by_category",
]
