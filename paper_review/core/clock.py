from datetime import datetime, timezone


def utcnow() -> datetime:
    """Текущее время UTC без tzinfo (так его возвращают все поддерживаемые БД)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
