"""Settings repository for household key/value pairs and the monthly budget."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlmodel import select

from ...config import BaseConfig
from ...logging_config import get_logger
from ...models.settings import AppSetting
from ..database import SessionFactory

logger = get_logger(__name__)


class SQLModelSettingsRepository:
    """SQLModel-based settings repository."""

    def __init__(self, session_factory: SessionFactory, *, budget_key: str = BaseConfig.BUDGET_SETTING_KEY):
        self.session_factory = session_factory
        self.budget_key = budget_key

    def get(self, key: str) -> Optional[AppSetting]:
        with self.session_factory() as session:
            setting = session.exec(select(AppSetting).where(AppSetting.key == key)).first()
            if setting:
                session.expunge(setting)
            return setting

    def set(self, key: str, value: str, description: str | None = None) -> AppSetting:
        """Insert or overwrite ``key`` (merge semantics)."""
        with self.session_factory() as session:
            setting = session.exec(select(AppSetting).where(AppSetting.key == key)).first()
            if setting:
                setting.value = value
                if description is not None:
                    setting.description = description
            else:
                setting = AppSetting(key=key, value=value, description=description)
                session.add(setting)
            session.commit()
            session.refresh(setting)
            session.expunge(setting)
            return setting

    def get_budget(self) -> Decimal:
        """Return the household's monthly budget, zero when never set."""
        setting = self.get(self.budget_key)
        if setting is None:
            return Decimal("0")
        try:
            return Decimal(setting.value)
        except InvalidOperation:
            logger.warning("Ignoring malformed budget setting", extra={"value": setting.value})
            return Decimal("0")

    def set_budget(self, amount: Decimal) -> None:
        self.set(self.budget_key, str(amount), description="Monthly household budget")
        logger.info("Monthly budget updated", extra={"budget": amount})


__all__ = ["SQLModelSettingsRepository"]
