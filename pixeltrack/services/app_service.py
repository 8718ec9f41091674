"""
App Service - app registration and settings management.
Every other service resolves the public app_id through here.
"""
import logging
import secrets
from typing import Optional, List, Dict, Any
from uuid import UUID
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import func

from pixeltrack.core.errors import ValidationError, AppNotFoundError, DatabaseError
from pixeltrack.models.app import App, AppSettings
from pixeltrack.models.event import Event
from pixeltrack.models.session import AnalyticsSession, DailyStats
from pixeltrack.models.custom_event import CustomEvent
from pixeltrack.utils.encryption import encrypt_token

logger = logging.getLogger(__name__)


def generate_app_id() -> str:
    """Public app id: 8 random bytes, hex encoded (16 chars)"""
    return secrets.token_hex(8)


class AppService:
    """App management. Each instance borrows one request-scoped session."""

    def __init__(self, db: Session):
        self.db = db

    def get_user_apps(self, user_id: str) -> List[App]:
        """
        List apps owned by a user, newest first.
        Each app gets a transient `event_count` attribute.
        """
        try:
            rows = (
                self.db.query(App, func.count(Event.id))
                .outerjoin(Event, Event.app_id == App.id)
                .options(selectinload(App.settings))
                .filter(App.user_id == user_id)
                .group_by(App.id)
                .order_by(App.created_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error listing apps for user {user_id}: {e}", exc_info=True)
            raise DatabaseError() from e

        apps = []
        for app, event_count in rows:
            app.event_count = event_count
            apps.append(app)
        return apps

    def get_app_by_id(self, id: UUID) -> App:
        """Get app by internal primary key. Raises AppNotFoundError."""
        app = self.db.query(App).filter(App.id == id).first()
        if not app:
            raise AppNotFoundError()
        return app

    def get_app_by_app_id(self, app_id: Optional[str]) -> App:
        """
        Resolve a public app id to the App row.

        Raises:
            ValidationError: app_id missing
            AppNotFoundError: no such app
        """
        if not app_id:
            raise ValidationError("App ID required")

        try:
            app = self.db.query(App).filter(App.app_id == app_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error resolving app {app_id}: {e}", exc_info=True)
            raise DatabaseError() from e

        if not app:
            raise AppNotFoundError()
        return app

    def create_app_with_settings(
        self,
        user_id: Optional[str],
        name: Optional[str],
        meta_app_id: Optional[str] = None,
        meta_access_token: Optional[str] = None,
    ) -> App:
        """
        Create an app and its settings row in one transaction.

        Args:
            user_id: Owner id
            name: Display name
            meta_app_id: Meta pixel (dataset) id, optional
            meta_access_token: Meta access token, optional; stored encrypted

        Returns:
            The new App, with `settings` loaded
        """
        user_id = (user_id or "").strip()
        name = (name or "").strip()
        if not user_id or not name:
            raise ValidationError("userId and name are required")

        app = App(app_id=generate_app_id(), user_id=user_id, name=name)
        app.settings = AppSettings(
            meta_pixel_id=meta_app_id or None,
            meta_access_token=encrypt_token(meta_access_token) or None,
            meta_pixel_enabled=bool(meta_app_id and meta_access_token),
            meta_verified=False,
        )

        try:
            self.db.add(app)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating app for user {user_id}: {e}", exc_info=True)
            raise DatabaseError() from e

        self.db.refresh(app)
        self.db.refresh(app.settings)
        logger.info(f"Created app {app.app_id} ({app.name}) for user {user_id}")
        return app

    def rename_app(self, id: UUID, new_name: Optional[str]) -> App:
        new_name = (new_name or "").strip()
        if not new_name:
            raise ValidationError("name is required")

        app = self.get_app_by_id(id)
        app.name = new_name
        self._commit(f"renaming app {id}")
        self.db.refresh(app)
        return app

    def delete_app_with_data(self, id: UUID) -> Dict[str, Any]:
        """
        Delete an app and everything recorded for it.
        Children go first to respect foreign keys.
        """
        app = self.get_app_by_id(id)

        for model in (CustomEvent, Event, AnalyticsSession, DailyStats):
            self.db.query(model).filter(model.app_id == app.id).delete(synchronize_session=False)
        self.db.delete(app)
        self._commit(f"deleting app {id}")

        logger.info(f"Deleted app {id} with all data")
        return {"success": True}

    def update_app_settings(self, id: UUID, data: Dict[str, Any]) -> AppSettings:
        """
        Apply a partial settings update.

        Args:
            id: App primary key
            data: Field name -> value; only keys present are written
        """
        app = self.get_app_by_id(id)
        settings = app.settings
        if settings is None:
            settings = AppSettings(app_id=app.id)
            self.db.add(settings)

        for field, value in data.items():
            if field == "meta_access_token":
                value = encrypt_token(value) or None
            setattr(settings, field, value)

        self._commit(f"updating settings for app {id}")
        self.db.refresh(settings)
        return settings

    def _commit(self, action: str):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error {action}: {e}", exc_info=True)
            raise DatabaseError() from e
