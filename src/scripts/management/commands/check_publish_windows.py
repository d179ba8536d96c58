"""Report articles whose publish window starts after it stops."""

from django.core.management.base import BaseCommand
from django.db.models import F

from articles.models import Article


class Command(BaseCommand):
    help = "List articles whose published_start is later than their published_stop."

    def handle(self, *args, **options):
        inverted = Article.objects.filter(
            published_start__isnull=False,
            published_stop__isnull=False,
            published_start__gt=F("published_stop"),
        ).order_by("id")

        total = Article.objects.count()
        count = inverted.count()
        self.stdout.write(f"Total: {total}")
        if not count:
            self.stdout.write(self.style.SUCCESS("Inverted publish windows: 0"))
            return

        self.stdout.write(self.style.WARNING(f"Inverted publish windows: {count}"))
        for article in inverted:
            self.stdout.write(
                f"- {article.pk} | {article.slug} | "
                f"{article.published_start.isoformat()} > {article.published_stop.isoformat()}"
            )
