from .audit import AuditStamp, to_iso, utc_now

__all__ = [
    "AuditStamp",
    "to_iso",
    "utc_now",
]
