"""Per-cafeteria reads over feedback: the owner's dashboard listing and its rating summary."""

from datetime import timedelta

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from campus.feedback.feedback import MAX_RATING, MIN_RATING, Feedback
from campus.utils.clock import as_utc, start_of_day, utcnow

PAGE_SIZE = 50

PERIODS = ("all", "today", "week", "month")


def _iter_feedback(cafeteria_id):
    repo = current_domain.repository_for(Feedback)
    offset = 0
    while True:
        page = (
            repo._dao.query.filter(cafeteria_id=str(cafeteria_id))
            .order_by("-created_at")
            .offset(offset)
            .limit(PAGE_SIZE)
            .all()
        )
        yield from page.items
        if len(page.items) < PAGE_SIZE:
            return
        offset += PAGE_SIZE


def period_start(period, now=None):
    """Earliest ``created_at`` included by a named period; None means no bound."""
    now = as_utc(now) if now else utcnow()
    if period in (None, "all"):
        return None
    if period == "today":
        return start_of_day(now)
    if period == "week":
        return now - timedelta(days=7)
    if period == "month":
        return now - timedelta(days=30)
    raise ValidationError({"period": [f"Period must be one of {', '.join(PERIODS)}"]})


def feedback_for_cafeteria(cafeteria_id, rating=None, since=None):
    """Feedback for one cafeteria, newest first, optionally one star rating and a lower date bound."""
    since = as_utc(since)
    return [
        feedback
        for feedback in _iter_feedback(cafeteria_id)
        if (rating is None or feedback.rating == rating)
        and (since is None or as_utc(feedback.created_at) >= since)
    ]


def rating_summary(cafeteria_id):
    """Average rating (one decimal), feedback count and per-star distribution."""
    distribution = {str(stars): 0 for stars in range(MIN_RATING, MAX_RATING + 1)}
    for feedback in _iter_feedback(cafeteria_id):
        distribution[str(feedback.rating)] += 1

    count = sum(distribution.values())
    if count == 0:
        return {"average": 0.0, "count": 0, "distribution": distribution}

    total = sum(int(stars) * n for stars, n in distribution.items())
    return {"average": round(total / count, 1), "count": count, "distribution": distribution}
