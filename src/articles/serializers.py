"""Serializers for Article and Category CRUD with standard envelope support."""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from . import services
from .models import Article, Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        """Expose category fields; timestamps are read-only."""
        model = Category
        fields = ["id", "title", "slug", "active", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class ArticleSerializer(serializers.ModelSerializer):
    """Article payload with status label and attachment URLs resolved explicitly."""

    status_label = serializers.CharField(source="get_status_display", read_only=True)
    preview_image = serializers.SerializerMethodField()
    images = serializers.SerializerMethodField()

    class Meta:
        """Expose article fields; counters, attachments and timestamps are read-only."""
        model = Article
        fields = [
            "id",
            "status",
            "status_label",
            "category",
            "title",
            "slug",
            "preview_text",
            "content",
            "published_start",
            "published_stop",
            "view_count",
            "preview_image",
            "images",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "view_count", "created_at", "updated_at"]

    @extend_schema_field(OpenApiTypes.URI)
    def get_preview_image(self, obj):
        preview, _ = services.split_files(obj)
        return self._file_url(preview) if preview else None

    @extend_schema_field(serializers.ListField(child=serializers.URLField()))
    def get_images(self, obj):
        _, images = services.split_files(obj)
        return [self._file_url(image) for image in images]

    def _file_url(self, attachment):
        url = attachment.file.url
        request = self.context.get("request")
        return request.build_absolute_uri(url) if request else url


class ArticleFileUploadSerializer(serializers.Serializer):
    """Validate a multipart upload for an article attachment."""

    file = serializers.FileField()
    title = serializers.CharField(required=False, allow_blank=True, default="")


__all__ = ["CategorySerializer", "ArticleSerializer", "ArticleFileUploadSerializer"]
