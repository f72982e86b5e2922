"""Created/updated metadata stamped on every record."""

from dataclasses import asdict, dataclass
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """Format as ISO-8601 UTC with millisecond precision, e.g. ``2024-01-01T00:00:00.000Z``."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class AuditStamp:
    """Who touched a record, and when."""

    by: str
    when: str

    @classmethod
    def now(cls, actor: str, moment: datetime | None = None) -> "AuditStamp":
        return cls(by=actor, when=to_iso(moment or utc_now()))

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
