"""Shared helpers for tests (article factories, seeding, media storage)."""

from __future__ import annotations

import shutil
import tempfile
from datetime import datetime, timezone as dt_timezone
from itertools import count

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings

from articles.models import Article, ArticleStatus, Category
from scripts.management.commands.seed_news import create_seed_articles, create_seed_categories

User = get_user_model()

_slugs = count(1)


def at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    """Return an aware UTC datetime on a fixed date, for readable window tests."""
    return datetime(2024, 5, day, hour, minute, tzinfo=dt_timezone.utc)


def make_article(**fields) -> Article:
    """Create an article with a unique slug unless one is given."""
    number = next(_slugs)
    fields.setdefault("title", f"Article {number}")
    fields.setdefault("slug", f"article-{number}")
    fields.setdefault("status", ArticleStatus.NEW)
    return Article.objects.create(**fields)


def make_category(slug: str = "general", title: str = "General") -> Category:
    return Category.objects.create(slug=slug, title=title)


def seed_news_basics(now=None) -> tuple[dict, dict]:
    """Create demo categories and articles via the ``seed_news`` helpers."""
    categories = create_seed_categories()
    articles = create_seed_articles(categories, now=now)
    return categories, articles


def create_user(username: str = "editor", password: str = "EditorPass123"):
    return User.objects.create_user(username=username, password=password)


def image_upload(name: str = "photo.jpg", content: bytes = b"\xff\xd8\xff fake jpeg") -> SimpleUploadedFile:
    return SimpleUploadedFile(name, content, content_type="image/jpeg")


class TempMediaMixin:
    """Point MEDIA_ROOT at a throwaway directory for the test class."""

    @classmethod
    def setUpClass(cls):
        cls._media_root = tempfile.mkdtemp(prefix="good-news-media-")
        cls._media_override = override_settings(MEDIA_ROOT=cls._media_root)
        cls._media_override.enable()
        super().setUpClass()

    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        cls._media_override.disable()
        shutil.rmtree(cls._media_root, ignore_errors=True)
