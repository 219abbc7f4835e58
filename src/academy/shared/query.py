"""Repository query helpers shared across aggregates."""

from protean.utils.globals import current_domain

PAGE_SIZE = 100


def fetch_all(aggregate_cls, **filters):
    """Return every record of ``aggregate_cls`` matching ``filters``.

    Protean querysets return one page at a time, so results are collected
    page by page until a short page comes back. Pages are ordered by id to
    keep offsets stable between queries.
    """
    dao = current_domain.repository_for(aggregate_cls)._dao
    query = (dao.query.filter(**filters) if filters else dao.query).order_by("id")
    records = []
    offset = 0
    while True:
        page = query.offset(offset).limit(PAGE_SIZE).all()
        records.extend(page.items)
        if len(page.items) < PAGE_SIZE:
            return records
        offset += PAGE_SIZE


def fetch_one(aggregate_cls, **filters):
    """Return the first record matching ``filters``, or None."""
    results = current_domain.repository_for(aggregate_cls)._dao.query.filter(**filters).all()
    return results.first
