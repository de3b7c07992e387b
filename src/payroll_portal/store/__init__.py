"""Record store access."""

from payroll_portal.store.record_store import RecordStore

__all__ = ["RecordStore"]
