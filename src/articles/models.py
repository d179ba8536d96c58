"""News models: Category, Article, and the files attached to articles."""

from django.db import models
from django.utils import timezone

from . import filters
from .cache import forget_article
from .choices import ArticleStatus, status_options
from .lifecycle import before_save, validate_article


class Category(models.Model):
    """Category an article belongs to."""

    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["title"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title


class ArticleQuerySet(models.QuerySet):
    """Chainable wrappers around the functions in ``articles.filters``."""

    def by_status(self, status):
        return filters.filter_by_status(self, status)

    def by_status_in(self, statuses):
        return filters.filter_by_status_in(self, statuses)

    def by_slug(self, slug):
        return filters.filter_by_slug(self, slug)

    def by_category(self, category):
        return filters.filter_by_category(self, category)

    def published(self, now=None):
        return filters.filter_published(self, now or timezone.now())

    def published_start_after(self, now=None):
        return filters.filter_start_after(self, now or timezone.now())

    def published_stop_after(self, now=None):
        return filters.filter_stop_after(self, now or timezone.now())


class Article(models.Model):
    """News article with a status, a publish window and attached images."""

    status = models.PositiveSmallIntegerField(
        choices=ArticleStatus.choices, default=ArticleStatus.NEW, db_column="status_id"
    )
    category = models.ForeignKey(
        Category, null=True, blank=True, on_delete=models.SET_NULL, related_name="articles"
    )
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    preview_text = models.TextField(blank=True)
    content = models.TextField(blank=True)
    published_start = models.DateTimeField(null=True, blank=True)
    published_stop = models.DateTimeField(null=True, blank=True)
    view_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ArticleQuerySet.as_manager()

    class Meta:
        ordering = ["-published_start", "-id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title

    def save(self, *args, now=None, **kwargs):
        """Stamp the publish start, validate, write, then drop the cached payload."""
        start = self.published_start
        before_save(self, now or timezone.now())
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and self.published_start != start:
            update_fields = set(update_fields)
            update_fields.add("published_start")
            kwargs["update_fields"] = update_fields
        validate_article(self)
        super().save(*args, **kwargs)
        forget_article(self.pk)

    def delete(self, *args, **kwargs):
        pk = self.pk
        result = super().delete(*args, **kwargs)
        forget_article(pk)
        return result


class ArticleFile(models.Model):
    """File stored for an article, either its preview image or one of its images."""

    PREVIEW_IMAGE = "preview_image"
    IMAGES = "images"
    FIELD_CHOICES = [
        (PREVIEW_IMAGE, "Preview image"),
        (IMAGES, "Images"),
    ]

    article = models.ForeignKey(Article, on_delete=models.CASCADE, related_name="files")
    field = models.CharField(max_length=32, choices=FIELD_CHOICES)
    file = models.FileField(upload_to="articles/%Y/%m/")
    title = models.CharField(max_length=255, blank=True)
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["sort_order", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["article"],
                condition=models.Q(field="preview_image"),
                name="articles_single_preview_image",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.article_id}:{self.field}:{self.file.name}"


__all__ = ["ArticleStatus", "status_options", "Category", "ArticleQuerySet", "Article", "ArticleFile"]
