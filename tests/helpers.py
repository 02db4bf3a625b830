from datetime import UTC, datetime, timedelta

from dermascan.scans.models import ScanRecord


def make_record(
    scan_id: str = "s1",
    user_id: str = "u1",
    status: str = "pending_analysis",
    created_at: datetime | None = None,
    captured_at: datetime | None = None,
) -> ScanRecord:
    return ScanRecord(
        scan_id=scan_id,
        user_id=user_id,
        image_path=f"users/{user_id}/scans/{scan_id}.jpg",
        download_url=f"https://cdn.test/users/{user_id}/scans/{scan_id}.jpg",
        status=status,
        created_at=created_at,
        captured_at=captured_at,
    )


def minutes_ago(minutes: int) -> datetime:
    return datetime(2026, 1, 1, 12, 0, tzinfo=UTC) - timedelta(minutes=minutes)
