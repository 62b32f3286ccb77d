from django.conf import settings
from django.core.paginator import Page, Paginator


def paginate(qs, page=1, page_size: int | None = None) -> Page:
    """Slice an ordered queryset into one page; out-of-range pages clamp to the last one."""
    size = page_size or settings.BAKERY_ORDERS_PAGE_SIZE
    return Paginator(qs, size).get_page(page)
