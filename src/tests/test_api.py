"""HTTP tests for the article and category endpoints."""

from __future__ import annotations

from datetime import timedelta
from unittest import mock

from django.core.cache import cache
from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from articles.models import Article, ArticleStatus
from articles.services import attach_image, attach_preview_image
from tests.utils import TempMediaMixin, create_user, image_upload, make_article, make_category


class ArticleListFilterTests(TestCase):
    """Query parameters map onto the article filters."""

    @classmethod
    def setUpTestData(cls):
        now = timezone.now()
        cls.category = make_category("news", "News")
        cls.live = make_article(
            slug="live",
            status=ArticleStatus.PUBLISHED,
            category=cls.category,
            published_start=now - timedelta(hours=1),
            published_stop=now + timedelta(hours=1),
        )
        cls.expired = make_article(
            slug="expired",
            status=ArticleStatus.PUBLISHED,
            published_start=now - timedelta(days=2),
            published_stop=now - timedelta(days=1),
        )
        cls.scheduled = make_article(
            slug="scheduled",
            status=ArticleStatus.PUBLISHED,
            published_start=now + timedelta(days=1),
        )
        cls.draft = make_article(slug="draft", status=ArticleStatus.NEW)
        cls.review = make_article(slug="review", status=ArticleStatus.REVIEW)

    def setUp(self):
        self.api_client = APIClient()

    def _slugs(self, query: str = "") -> set[str]:
        response = self.api_client.get(f"/articles/{query}")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["errors"], [])
        return {item["slug"] for item in body["data"]}

    def test_list_without_filters_returns_everything(self):
        self.assertEqual(self._slugs(), {"live", "expired", "scheduled", "draft", "review"})

    def test_status_filter(self):
        self.assertEqual(self._slugs(f"?status={ArticleStatus.REVIEW}"), {"review"})

    def test_empty_status_is_ignored(self):
        self.assertEqual(len(self._slugs("?status=")), 5)

    def test_invalid_status_is_rejected(self):
        response = self.api_client.get("/articles/?status=abc")
        self.assertEqual(response.status_code, 400)
        self.assertIsNone(response.json()["data"])

    def test_status_in_filter(self):
        query = f"?status__in={ArticleStatus.NEW},{ArticleStatus.REVIEW}"
        self.assertEqual(self._slugs(query), {"draft", "review"})

    def test_invalid_status_in_entry_is_rejected(self):
        response = self.api_client.get(f"/articles/?status__in={ArticleStatus.NEW},abc")
        self.assertEqual(response.status_code, 400)
        self.assertIn("status__in", response.json()["errors"][0])

    def test_published_filter(self):
        self.assertEqual(self._slugs("?published=1"), {"live"})

    def test_scheduled_filter(self):
        self.assertEqual(self._slugs("?scheduled=true"), {"scheduled"})

    def test_not_expired_filter(self):
        self.assertEqual(self._slugs("?not_expired=1"), {"live"})

    def test_category_and_slug_filters(self):
        self.assertEqual(self._slugs(f"?category={self.category.pk}"), {"live"})
        self.assertEqual(self._slugs("?slug=draft"), {"draft"})

    def test_status_options_excludes_review(self):
        response = self.api_client.get("/articles/status-options/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json()["data"],
            [
                {"value": 1, "label": "New"},
                {"value": 2, "label": "In work"},
                {"value": 4, "label": "Published"},
            ],
        )

    def test_detail_includes_status_label(self):
        response = self.api_client.get(f"/articles/{self.review.pk}/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["status_label"], "Review")

    def test_missing_article_is_enveloped_404(self):
        response = self.api_client.get("/articles/999999/")
        self.assertEqual(response.status_code, 404)
        self.assertIsNone(response.json()["data"])


class ArticleWriteTests(TestCase):
    """Writes require authentication and honor validation and the publish hook."""

    @classmethod
    def setUpTestData(cls):
        cls.user = create_user()
        cls.category = make_category()

    def setUp(self):
        self.api_client = APIClient()
        self.api_client.force_authenticate(self.user)

    def test_anonymous_cannot_create(self):
        response = APIClient().post("/articles/", {"title": "X", "slug": "x"}, format="json")
        self.assertIn(response.status_code, (401, 403))
        self.assertFalse(Article.objects.exists())

    def test_create_published_article_stamps_start(self):
        payload = {
            "title": "Launch",
            "slug": "launch",
            "status": ArticleStatus.PUBLISHED,
            "category": self.category.pk,
            "content": "<p>Body</p>",
        }
        response = self.api_client.post("/articles/", payload, format="json")
        self.assertEqual(response.status_code, 201)
        data = response.json()["data"]
        self.assertIsNotNone(data["published_start"])
        self.assertIsNone(data["published_stop"])
        self.assertEqual(data["view_count"], 0)
        self.assertEqual(data["category"], self.category.pk)

    def test_duplicate_slug_is_rejected(self):
        make_article(slug="taken")
        response = self.api_client.post("/articles/", {"title": "Again", "slug": "taken"}, format="json")
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertIsNone(body["data"])
        self.assertIn("slug", body["errors"][0])

    def test_missing_title_is_rejected(self):
        response = self.api_client.post("/articles/", {"slug": "no-title"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertIn("title", response.json()["errors"][0])

    def test_view_count_is_read_only(self):
        article = make_article()
        response = self.api_client.patch(f"/articles/{article.pk}/", {"view_count": 50}, format="json")
        self.assertEqual(response.status_code, 200)
        article.refresh_from_db()
        self.assertEqual(article.view_count, 0)

    def test_any_status_transition_is_allowed(self):
        article = make_article(status=ArticleStatus.PUBLISHED)
        for status in (ArticleStatus.NEW, ArticleStatus.REVIEW, ArticleStatus.IN_WORK):
            with self.subTest(status=status):
                response = self.api_client.patch(f"/articles/{article.pk}/", {"status": status}, format="json")
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.json()["data"]["status"], status)

    def test_delete(self):
        article = make_article()
        response = self.api_client.delete(f"/articles/{article.pk}/")
        self.assertEqual(response.status_code, 204)
        self.assertFalse(Article.objects.filter(pk=article.pk).exists())

    def test_database_error_becomes_503(self):
        with mock.patch("articles.views.ArticleViewSet.get_queryset", side_effect=DatabaseError("down")):
            response = self.api_client.get("/articles/")
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json(), {"data": None, "errors": ["Service temporarily unavailable."]})


class ArticleActionTests(TempMediaMixin, TestCase):
    """View counter, uploads and the cached payload endpoint."""

    @classmethod
    def setUpTestData(cls):
        cls.user = create_user()

    def setUp(self):
        cache.clear()
        self.article = make_article(title="Gallery", slug="gallery")
        self.api_client = APIClient()

    def test_anonymous_view_increments_counter(self):
        first = self.api_client.post(f"/articles/{self.article.pk}/view/")
        second = self.api_client.post(f"/articles/{self.article.pk}/view/")
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["data"]["view_count"], 1)
        self.assertEqual(second.json()["data"]["view_count"], 2)

    def test_upload_requires_authentication(self):
        response = self.api_client.post(
            f"/articles/{self.article.pk}/images/", {"file": image_upload()}, format="multipart"
        )
        self.assertIn(response.status_code, (401, 403))

    def test_upload_preview_and_images(self):
        self.api_client.force_authenticate(self.user)

        preview = self.api_client.post(
            f"/articles/{self.article.pk}/preview-image/",
            {"file": image_upload("cover.jpg")},
            format="multipart",
        )
        self.assertEqual(preview.status_code, 201)
        self.assertIn("/media/", preview.json()["data"]["preview_image"])

        for name in ("one.jpg", "two.jpg"):
            response = self.api_client.post(
                f"/articles/{self.article.pk}/images/", {"file": image_upload(name)}, format="multipart"
            )
            self.assertEqual(response.status_code, 201)
        self.assertEqual(len(response.json()["data"]["images"]), 2)

    def test_upload_without_file_is_rejected(self):
        self.api_client.force_authenticate(self.user)
        response = self.api_client.post(f"/articles/{self.article.pk}/images/", {}, format="multipart")
        self.assertEqual(response.status_code, 400)

    def test_list_loads_attachments_in_one_query(self):
        self.api_client.force_authenticate(self.user)
        for slug in ("second", "third"):
            article = make_article(slug=slug)
            attach_image(article, image_upload())
        attach_preview_image(self.article, image_upload("cover.jpg"))
        attach_image(self.article, image_upload("one.jpg"))

        with self.assertNumQueries(2):
            response = self.api_client.get("/articles/")
        self.assertEqual(response.status_code, 200)
        by_slug = {item["slug"]: item for item in response.json()["data"]}
        self.assertIn("/media/", by_slug["gallery"]["preview_image"])
        self.assertEqual(len(by_slug["gallery"]["images"]), 1)
        self.assertIsNone(by_slug["second"]["preview_image"])
        self.assertEqual(len(by_slug["third"]["images"]), 1)

    def test_cached_payload(self):
        response = self.api_client.get(f"/articles/{self.article.pk}/cached/")
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["title"], "Gallery")
        self.assertIsNone(data["preview_image"])
        self.assertEqual(data["images"], [])


class CategoryApiTests(TestCase):
    def setUp(self):
        self.api_client = APIClient()
        self.api_client.force_authenticate(create_user())

    def test_create_and_list(self):
        response = self.api_client.post("/categories/", {"title": "Sport", "slug": "sport"}, format="json")
        self.assertEqual(response.status_code, 201)
        listing = self.api_client.get("/categories/").json()["data"]
        self.assertEqual([item["slug"] for item in listing], ["sport"])

    def test_duplicate_slug_is_rejected(self):
        make_category("sport", "Sport")
        response = self.api_client.post("/categories/", {"title": "Sport 2", "slug": "sport"}, format="json")
        self.assertEqual(response.status_code, 400)
