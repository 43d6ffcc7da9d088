"""Site-wide key/value settings."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio.db.models import Setting

SENSITIVE_KEYS = frozenset({"github_token"})
MASK = "••••••••"


def mask_value(value: str) -> str:
    """Hide a secret, keeping the first and last 4 characters of long values."""
    if len(value) <= 8:
        return MASK
    return f"{value[:4]}{MASK}{value[-4:]}"


def get_setting(session: Session, key: str) -> str | None:
    setting = session.get(Setting, key)
    return setting.value if setting is not None else None


def set_setting(session: Session, key: str, value: str) -> None:
    """Insert or update a setting."""
    setting = session.get(Setting, key)
    if setting is None:
        session.add(Setting(key=key, value=value))
    else:
        setting.value = value
    session.flush()


def list_settings(session: Session, *, masked: bool = True) -> dict[str, str]:
    """All settings by key, sensitive values masked unless masked is False."""
    result: dict[str, str] = {}
    for setting in session.scalars(select(Setting).order_by(Setting.key)):
        value = setting.value
        if masked and setting.key in SENSITIVE_KEYS and value:
            value = mask_value(value)
        result[setting.key] = value
    return result
