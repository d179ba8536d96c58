"""Seed demo categories and articles."""

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from articles.models import Article, ArticleStatus, Category

SEED_CATEGORIES = {
    "company": "Company news",
    "releases": "Releases",
}

SEED_ARTICLES = [
    {
        "slug": "welcome",
        "title": "Welcome to the news section",
        "category": "company",
        "status": ArticleStatus.PUBLISHED,
        "start": timedelta(days=-7),
        "stop": None,
    },
    {
        "slug": "release-1-0",
        "title": "Version 1.0 released",
        "category": "releases",
        "status": ArticleStatus.PUBLISHED,
        "start": timedelta(days=-1),
        "stop": timedelta(days=30),
    },
    {
        "slug": "spring-sale",
        "title": "Spring sale announcement",
        "category": "company",
        "status": ArticleStatus.PUBLISHED,
        "start": timedelta(days=3),
        "stop": timedelta(days=10),
    },
    {
        "slug": "roadmap-draft",
        "title": "Roadmap draft",
        "category": "releases",
        "status": ArticleStatus.IN_WORK,
        "start": None,
        "stop": None,
    },
]


def create_seed_categories() -> dict:
    """Create demo categories if missing and return a slug->Category map."""
    categories = {}
    for slug, title in SEED_CATEGORIES.items():
        category, _ = Category.objects.get_or_create(slug=slug, defaults={"title": title})
        categories[slug] = category
    return categories


def create_seed_articles(categories, now=None) -> dict:
    """Create demo articles relative to ``now`` and return a slug->Article map."""
    now = now or timezone.now()
    articles = {}
    for entry in SEED_ARTICLES:
        article, _ = Article.objects.get_or_create(
            slug=entry["slug"],
            defaults={
                "title": entry["title"],
                "category": categories[entry["category"]],
                "status": entry["status"],
                "preview_text": f"{entry['title']}.",
                "content": f"<p>{entry['title']}.</p>",
                "published_start": now + entry["start"] if entry["start"] is not None else None,
                "published_stop": now + entry["stop"] if entry["stop"] is not None else None,
            },
        )
        articles[entry["slug"]] = article
    return articles


class Command(BaseCommand):
    """Management command to seed demo news data."""

    help = (
        "Seed demo categories and articles. "
        "Use --reset to clear previously seeded data first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete previously seeded categories and articles before running the seeder.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        if options.get("reset"):
            self._reset_seeded_data()

        self.stdout.write("Seeding news data...")
        categories = create_seed_categories()
        articles = create_seed_articles(categories)
        self.stdout.write(
            self.style.SUCCESS(f"News seed completed: {len(categories)} categories, {len(articles)} articles.")
        )

    def _reset_seeded_data(self) -> None:
        """Remove only the rows this command creates, matched by slug."""
        self.stdout.write("Resetting previously seeded news data...")
        for article in Article.objects.filter(slug__in=[entry["slug"] for entry in SEED_ARTICLES]):
            article.delete()
        Category.objects.filter(slug__in=list(SEED_CATEGORIES)).delete()
        self.stdout.write(self.style.WARNING("Seeded news data cleared."))
