"""Article status values and the options offered for them in forms."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class ArticleStatus(models.IntegerChoices):
    """Workflow stage of an article, independent of its publish window."""

    NEW = 1, _("New")
    IN_WORK = 2, _("In work")
    REVIEW = 3, _("Review")
    PUBLISHED = 4, _("Published")


def status_options() -> dict:
    """Return the status choices offered in editing forms, in display order.

    Review is not offered here even though it is a valid status.
    """
    return {
        ArticleStatus.NEW.value: ArticleStatus.NEW.label,
        ArticleStatus.IN_WORK.value: ArticleStatus.IN_WORK.label,
        ArticleStatus.PUBLISHED.value: ArticleStatus.PUBLISHED.label,
    }


__all__ = ["ArticleStatus", "status_options"]
