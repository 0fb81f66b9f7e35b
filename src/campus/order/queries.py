"""Paged reads over the order store, most recent first."""

from protean.utils.globals import current_domain

from campus.order.order import Order

DEFAULT_PAGE_SIZE = 20


def iter_orders(page_size=DEFAULT_PAGE_SIZE, **filters):
    """Yield orders matching ``filters`` newest first, one store page at a time."""
    repo = current_domain.repository_for(Order)
    offset = 0
    while True:
        page = (
            repo._dao.query.filter(**filters)
            .order_by("-created_at")
            .offset(offset)
            .limit(page_size)
            .all()
        )
        yield from page.items
        if len(page.items) < page_size:
            return
        offset += page_size


class StudentOrderHistory:
    """A student's orders, re-read from the store on every iteration."""

    def __init__(self, student_id, page_size=DEFAULT_PAGE_SIZE):
        self.student_id = str(student_id)
        self.page_size = page_size

    def __iter__(self):
        return iter_orders(page_size=self.page_size, student_id=self.student_id)


def list_for_student(student_id, page_size=DEFAULT_PAGE_SIZE):
    return StudentOrderHistory(student_id, page_size=page_size)
