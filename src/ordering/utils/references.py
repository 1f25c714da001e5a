"""Human-readable daily references such as ``ORD-20260115-007``."""

from datetime import UTC, datetime


def next_daily_reference(repository, prefix, field_name, on_date=None):
    """Return the next ``<prefix>-YYYYMMDD-NNN`` reference for ``on_date``.

    The sequence continues from the highest number on record for that day,
    so numbers freed by deleting an earlier record are not reused.
    """
    on_date = on_date or datetime.now(UTC).date()
    stem = f"{prefix}-{on_date:%Y%m%d}-"

    issued = (
        repository._dao.query.filter(**{f"{field_name}__startswith": stem}).limit(None).all().items
    )
    highest = max(
        (int(getattr(record, field_name)[len(stem):]) for record in issued),
        default=0,
    )
    return f"{stem}{highest + 1:03d}"
