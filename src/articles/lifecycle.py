"""Pre-persist hooks for articles: publish stamping and validation."""

import logging

from django.core.exceptions import ValidationError

from .choices import ArticleStatus

logger = logging.getLogger(__name__)


def before_save(article, now) -> None:
    """Set ``published_start`` to ``now`` when a published article has none."""
    if article.status == ArticleStatus.PUBLISHED and not article.published_start:
        article.published_start = now
        logger.debug("Stamped published_start=%s on article %r", now, article.slug)


def validate_article(article) -> None:
    """Raise ValidationError if title or slug is empty or the slug is taken."""
    errors: dict[str, list[str]] = {}

    if not (article.title or "").strip():
        errors.setdefault("title", []).append("This field is required.")

    slug = (article.slug or "").strip()
    if not slug:
        errors.setdefault("slug", []).append("This field is required.")
    else:
        others = type(article)._default_manager.filter(slug=slug)
        if article.pk is not None:
            others = others.exclude(pk=article.pk)
        if others.exists():
            errors.setdefault("slug", []).append("Article with this slug already exists.")

    if errors:
        raise ValidationError(errors)


__all__ = ["before_save", "validate_article"]
