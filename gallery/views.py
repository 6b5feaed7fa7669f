import math

from models.character import PAGE_SIZE

LOADING_MESSAGE = "Loading characters. Please wait."
NO_MATCH_MESSAGE = "No characters match your search."
NO_RESPONSE_MESSAGE = "There's no response from API."


def total_pages(total_count: int, page_size: int = PAGE_SIZE) -> int:
    if total_count <= 0:
        return 0
    return math.ceil(total_count / page_size)


def clamp_page(page: int, pages: int) -> int:
    # pages == 0 means the total is not known yet, only the lower bound applies
    page = max(1, page)
    if pages > 0:
        page = min(page, pages)
    return page


def page_label(page: int, pages: int) -> str:
    return f"Page {page} of {pages or 1}"


def can_go_previous(page: int, loading: bool) -> bool:
    return page > 1 and not loading


def can_go_next(page: int, pages: int, loading: bool) -> bool:
    return page < pages and not loading


def announcement(loading: bool, count: int, search: str) -> str:
    """Status line for assistive technology, mirrors what the list shows."""
    if loading:
        return LOADING_MESSAGE
    if count > 0:
        return f"Loaded {count} characters."
    if search.strip():
        return NO_MATCH_MESSAGE
    return ""


def empty_message(search: str) -> str:
    if search.strip():
        return NO_MATCH_MESSAGE
    return NO_RESPONSE_MESSAGE
