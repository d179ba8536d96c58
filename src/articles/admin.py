"""Django admin configuration for categories and articles."""

from django import forms
from django.contrib import admin

from .choices import status_options
from .models import Article, ArticleFile, Category


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["title", "slug", "active", "updated_at"]
    list_filter = ["active"]
    search_fields = ["title", "slug"]
    prepopulated_fields = {"slug": ("title",)}


class ArticleAdminForm(forms.ModelForm):
    """Article form whose status select offers only ``status_options()``."""

    status = forms.TypedChoiceField(coerce=int, choices=())

    class Meta:
        model = Article
        fields = "__all__"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["status"].choices = list(status_options().items())


class ArticleFileInline(admin.TabularInline):
    model = ArticleFile
    extra = 0
    fields = ["field", "file", "title", "sort_order"]


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    """Admin for articles with their attached files inline."""

    form = ArticleAdminForm
    list_display = ["title", "status", "category", "published_start", "published_stop", "view_count"]
    list_filter = ["status", "category"]
    search_fields = ["title", "slug", "preview_text"]
    prepopulated_fields = {"slug": ("title",)}
    readonly_fields = ["view_count", "created_at", "updated_at"]
    inlines = [ArticleFileInline]

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "status", "category"),
        }),
        ("Content", {
            "fields": ("preview_text", "content"),
        }),
        ("Publishing", {
            "fields": ("published_start", "published_stop"),
        }),
        ("Statistics", {
            "fields": ("view_count", "created_at", "updated_at"),
        }),
    )
