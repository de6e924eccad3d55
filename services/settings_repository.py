"""
Settings Repository - key/value admin settings (admin password, notification email).
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from database.models import AdminSetting

logger = logging.getLogger(__name__)

ADMIN_PASSWORD_KEY = 'admin_password'
NOTIFICATION_EMAIL_KEY = 'notification_email'


class SettingsRepository:
    """Repository for admin_settings rows."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        setting = self.session.get(AdminSetting, key)
        return setting.setting_value if setting else default

    def set(self, key: str, value: str) -> None:
        setting = self.session.get(AdminSetting, key)
        if setting is None:
            setting = AdminSetting(setting_key=key, setting_value=value)
            self.session.add(setting)
        else:
            setting.setting_value = value
            setting.updated_at = datetime.utcnow()
        self.session.flush()
        logger.info(f"Updated admin setting: {key}")

    def get_notification_email(self) -> str:
        return self.get(NOTIFICATION_EMAIL_KEY, '') or ''

    def set_notification_email(self, email: str) -> None:
        self.set(NOTIFICATION_EMAIL_KEY, email)
