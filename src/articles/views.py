"""Article and Category ViewSets."""

from rest_framework import permissions, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser

from core.response import BaseViewSet, api_response
from . import choices
from .cache import get_cached_article
from .models import Article, Category
from .serializers import ArticleFileUploadSerializer, ArticleSerializer, CategorySerializer
from .services import attach_image, attach_preview_image, increment_view_count

TRUE_VALUES = {"1", "true", "yes", "on"}


def _is_true(value) -> bool:
    return str(value).strip().lower() in TRUE_VALUES


def _split_ints(params, name: str) -> list[int]:
    """Parse a comma separated integer list parameter; reject entries that are not integers."""
    result = []
    for part in params.get(name, "").split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit():
            raise ValidationError({name: ["A comma separated list of integers is required."]})
        result.append(int(part))
    return result


def _int_param(params, name: str):
    """Return an integer query parameter, None when absent; reject other values."""
    value = params.get(name, "").strip()
    if not value:
        return None
    if not value.isdigit():
        raise ValidationError({name: ["A valid integer is required."]})
    return int(value)


class CategoryViewSet(BaseViewSet):
    serializer_class = CategorySerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]
    queryset = Category.objects.all()


class ArticleViewSet(BaseViewSet):
    """CRUD endpoints for articles plus status, view counter and upload actions."""

    serializer_class = ArticleSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def get_queryset(self):
        """Narrow the list using query parameters.

        - ``status`` and ``status__in`` (comma separated) filter by status.
        - ``category`` and ``slug`` filter by category id and slug.
        - ``published``, ``scheduled`` and ``not_expired`` apply the publish
          window filters against the current time.
        """
        queryset = Article.objects.select_related("category").prefetch_related("files")
        if self.action != "list":
            return queryset

        params = self.request.query_params
        queryset = queryset.by_status(_int_param(params, "status"))
        queryset = queryset.by_status_in(_split_ints(params, "status__in"))
        queryset = queryset.by_category(_int_param(params, "category"))
        queryset = queryset.by_slug(params.get("slug"))
        if _is_true(params.get("published", "")):
            queryset = queryset.published()
        if _is_true(params.get("scheduled", "")):
            queryset = queryset.published_start_after()
        if _is_true(params.get("not_expired", "")):
            queryset = queryset.published_stop_after()
        return queryset

    @action(detail=False, methods=["get"], url_path="status-options")
    def status_options(self, request):
        """List the status values offered in forms, in display order."""
        options = [{"value": value, "label": str(label)} for value, label in choices.status_options().items()]
        return api_response(options)

    @action(detail=True, methods=["post"], url_path="view", permission_classes=[permissions.AllowAny])
    def register_view(self, request, pk=None):
        """Count one view of the article."""
        article = self.get_object()
        return api_response({"id": article.pk, "view_count": increment_view_count(article)})

    @action(detail=True, methods=["get"])
    def cached(self, request, pk=None):
        """Return the cached payload of the article."""
        article = self.get_object()
        payload = get_cached_article(article.pk)
        if payload is None:
            raise NotFound()
        return api_response(payload)

    @action(detail=True, methods=["post"], url_path="preview-image")
    def preview_image(self, request, pk=None):
        """Upload the preview image, replacing any existing one."""
        return self._upload(request, attach_preview_image)

    @action(detail=True, methods=["post"])
    def images(self, request, pk=None):
        """Append an image to the article."""
        return self._upload(request, attach_image)

    def _upload(self, request, attach):
        article = self.get_object()
        upload = ArticleFileUploadSerializer(data=request.data)
        upload.is_valid(raise_exception=True)
        attach(article, upload.validated_data["file"], title=upload.validated_data["title"])
        # Reload so the prefetched files include the new attachment.
        article = self.get_queryset().get(pk=article.pk)
        data = ArticleSerializer(article, context=self.get_serializer_context()).data
        return api_response(data, status=status.HTTP_201_CREATED)


__all__ = ["CategoryViewSet", "ArticleViewSet"]
