"""Cached article payloads kept in Django's cache framework."""

import logging
from typing import Any, Optional

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "articles:article:"

CACHED_FIELDS = [
    "status",
    "category_id",
    "title",
    "slug",
    "preview_text",
    "content",
    "published_start",
    "published_stop",
    "view_count",
]


def cache_key(article_id) -> str:
    return f"{CACHE_KEY_PREFIX}{article_id}"


def get_cached_article(article_id) -> Optional[dict[str, Any]]:
    """Return the cached payload for an article, building it on a miss.

    Returns None if the article does not exist; misses for unknown ids are not cached.
    """
    key = cache_key(article_id)
    payload = cache.get(key)
    if payload is not None:
        return payload

    # Imported here to avoid a circular import with models.
    from .models import Article
    from .services import get_images, get_preview_image

    article = Article.objects.filter(pk=article_id).first()
    if article is None:
        return None

    payload = {field: getattr(article, field) for field in CACHED_FIELDS}
    preview = get_preview_image(article)
    payload["preview_image"] = preview.file.url if preview else None
    payload["images"] = [image.file.url for image in get_images(article)]

    cache.set(key, payload, timeout=getattr(settings, "ARTICLES_CACHE_TIMEOUT", 3600))
    logger.debug("Cached payload for article %s", article_id)
    return payload


def forget_article(article_id) -> None:
    """Drop the cached payload for an article, if any."""
    if article_id is None:
        return
    cache.delete(cache_key(article_id))


__all__ = ["CACHED_FIELDS", "cache_key", "get_cached_article", "forget_article"]
