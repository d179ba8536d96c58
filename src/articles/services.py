"""Attachment store and view counter operations for articles.

Relations to files are looked up explicitly here rather than through lazy
model attributes, so callers always see which queries run.
"""

import logging
from typing import Optional

from django.db import transaction
from django.db.models import F, Max

from .cache import forget_article
from .models import Article, ArticleFile

logger = logging.getLogger(__name__)


def get_preview_image(article: Article) -> Optional[ArticleFile]:
    """Return the article's preview image row, or None."""
    return ArticleFile.objects.filter(article=article, field=ArticleFile.PREVIEW_IMAGE).first()


def get_images(article: Article):
    """Return the article's image rows in display order."""
    return ArticleFile.objects.filter(article=article, field=ArticleFile.IMAGES).order_by("sort_order", "id")


def split_files(article: Article) -> tuple[Optional[ArticleFile], list[ArticleFile]]:
    """Return ``(preview_image, images)`` from ``article.files``.

    Uses the prefetched rows when the queryset was built with
    ``prefetch_related("files")``, so listing articles costs one extra query.
    """
    preview = None
    images = []
    for attachment in article.files.all():
        if attachment.field == ArticleFile.PREVIEW_IMAGE:
            preview = attachment
        else:
            images.append(attachment)
    return preview, images


def _forget_on_commit(article_id) -> None:
    transaction.on_commit(lambda: forget_article(article_id))


@transaction.atomic
def attach_preview_image(article: Article, file, title: str = "") -> ArticleFile:
    """Store ``file`` as the preview image, replacing the previous one."""
    previous = get_preview_image(article)
    if previous is not None:
        detach_file(previous)

    attachment = ArticleFile.objects.create(
        article=article, field=ArticleFile.PREVIEW_IMAGE, file=file, title=title
    )
    _forget_on_commit(article.pk)
    logger.info("Attached preview image %s to article %s", attachment.file.name, article.pk)
    return attachment


@transaction.atomic
def attach_image(article: Article, file, title: str = "") -> ArticleFile:
    """Append ``file`` to the article's images."""
    last = get_images(article).aggregate(last=Max("sort_order"))["last"]
    attachment = ArticleFile.objects.create(
        article=article,
        field=ArticleFile.IMAGES,
        file=file,
        title=title,
        sort_order=0 if last is None else last + 1,
    )
    _forget_on_commit(article.pk)
    logger.info("Attached image %s to article %s", attachment.file.name, article.pk)
    return attachment


def detach_file(attachment: ArticleFile) -> None:
    """Delete an attachment row; its stored file is removed once the transaction commits."""
    article_id = attachment.article_id
    name = attachment.file.name
    storage = attachment.file.storage
    attachment.delete()
    if name:
        transaction.on_commit(lambda: storage.delete(name))
    _forget_on_commit(article_id)
    logger.info("Detached file %s from article %s", name, article_id)


def increment_view_count(article: Article, by: int = 1) -> int:
    """Atomically add ``by`` to the stored view count and return the new value."""
    Article.objects.filter(pk=article.pk).update(view_count=F("view_count") + by)
    article.refresh_from_db(fields=["view_count"])
    forget_article(article.pk)
    return article.view_count


__all__ = [
    "get_preview_image",
    "get_images",
    "split_files",
    "attach_preview_image",
    "attach_image",
    "detach_file",
    "increment_view_count",
]
