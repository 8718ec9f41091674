"""
Tracking Service - records events posted by the pixel.

One call stores the event and updates the visitor session and the daily
rollup, then optionally forwards the event to Meta Conversions API.
Session and rollup writes run in a savepoint: a conflict there never
loses the event. Forwarding never fails the request.
"""
import logging
from datetime import date, datetime, timezone
from typing import Optional, Dict, Any
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pixeltrack.core.errors import ValidationError, DatabaseError, MetaApiError
from pixeltrack.core.monitoring import monitor_performance, track_error
from pixeltrack.models.app import App, AppSettings
from pixeltrack.models.event import Event
from pixeltrack.models.session import AnalyticsSession, DailyStats
from pixeltrack.schemas.event import TrackRequest
from pixeltrack.services.app_service import AppService
from pixeltrack.services.device_service import parse_device, get_device_type, is_bot
from pixeltrack.services.geo_service import get_geo_data, EMPTY_GEO
from pixeltrack.services import meta_service
from pixeltrack.utils.encryption import decrypt_token

logger = logging.getLogger(__name__)

PAGEVIEW = "pageview"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TrackingService:

    def __init__(self, db: Session):
        self.db = db

    @monitor_performance
    async def track_event(
        self,
        payload: TrackRequest,
        ip: str,
        user_agent: Optional[str],
    ) -> Optional[UUID]:
        """
        Record one pixel event.

        Args:
            payload: Event posted by the pixel
            ip: Client IP address
            user_agent: Client User-Agent header

        Returns:
            The stored event id, or None when the request came from a bot

        Raises:
            ValidationError: appId or eventName missing
            AppNotFoundError: unknown appId
            DatabaseError: the event could not be stored
        """
        if not payload.app_id or not payload.event_name:
            raise ValidationError("Missing required fields")

        if is_bot(user_agent):
            logger.debug(f"Ignoring bot traffic for app {payload.app_id}: {user_agent}")
            return None

        app = AppService(self.db).get_app_by_app_id(payload.app_id)
        app_settings = app.settings or AppSettings()

        device = parse_device(user_agent)
        device_type = get_device_type(user_agent, payload.screen_width)
        geo = await get_geo_data(ip) if app_settings.record_location is not False else dict(EMPTY_GEO)
        is_pageview = payload.event_name == PAGEVIEW
        stored_ip = ip if app_settings.record_ip is not False else None

        event = Event(
            app_id=app.id,
            event_name=payload.event_name,
            created_at=_utcnow(),
            url=payload.url,
            referrer=payload.referrer,
            page_title=payload.page_title,
            session_id=payload.session_id,
            fingerprint=payload.fingerprint,
            ip_address=stored_ip,
            user_agent=user_agent,
            browser=device.browser,
            browser_version=device.browser_version,
            os=device.os,
            os_version=device.os_version,
            device_type=device_type,
            screen_width=payload.screen_width,
            screen_height=payload.screen_height,
            city=geo["city"],
            region=geo["region"],
            country=geo["country"],
            country_code=geo["country_code"],
            timezone=geo["timezone"],
            utm_source=payload.utm_source,
            utm_medium=payload.utm_medium,
            utm_campaign=payload.utm_campaign,
            utm_term=payload.utm_term,
            utm_content=payload.utm_content,
            value=payload.value,
            currency=payload.currency,
            product_id=payload.product_id,
            product_name=payload.product_name,
            quantity=payload.quantity,
            custom_data=payload.properties,
        )

        try:
            self.db.add(event)
            self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error storing event for app {app.app_id}: {e}", exc_info=True)
            raise DatabaseError() from e

        record_session = bool(payload.session_id) and app_settings.record_session is not False
        if record_session or is_pageview:
            try:
                with self.db.begin_nested():
                    if record_session:
                        self._touch_session(app, payload, stored_ip, user_agent, device.browser, device.os,
                                            device_type, geo["country"], is_pageview)
                    if is_pageview:
                        self._bump_daily_stats(app, payload.fingerprint)
            except SQLAlchemyError as e:
                # aggregates are best effort, the event itself is kept
                logger.warning(f"Error updating session/daily stats for app {app.app_id}: {e}")

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error storing event for app {app.app_id}: {e}", exc_info=True)
            raise DatabaseError() from e

        self.db.refresh(event)

        if app_settings.meta_pixel_enabled and app_settings.meta_verified:
            await self._forward_to_meta(app, app_settings, event, payload)

        return event.id

    def _touch_session(
        self,
        app: App,
        payload: TrackRequest,
        ip: Optional[str],
        user_agent: Optional[str],
        browser: Optional[str],
        os_name: Optional[str],
        device_type: Optional[str],
        country: Optional[str],
        is_pageview: bool,
    ):
        now = _utcnow()
        if self._increment_session(app.id, payload.session_id, now, is_pageview):
            return

        try:
            with self.db.begin_nested():
                self.db.add(AnalyticsSession(
                    app_id=app.id,
                    session_id=payload.session_id,
                    fingerprint=payload.fingerprint or payload.visitor_id or "unknown",
                    ip_address=ip,
                    user_agent=user_agent,
                    browser=browser,
                    os=os_name,
                    device_type=device_type,
                    country=country,
                    pageviews=1 if is_pageview else 0,
                    start_time=now,
                    last_seen=now,
                ))
        except IntegrityError:
            # another request created the session first
            if not self._increment_session(app.id, payload.session_id, now, is_pageview):
                logger.warning(f"Session {payload.session_id} belongs to another app, not updating it")

    def _increment_session(self, app_pk: UUID, session_id: str, now: datetime, is_pageview: bool) -> int:
        values = {AnalyticsSession.last_seen: now}
        if is_pageview:
            values[AnalyticsSession.pageviews] = AnalyticsSession.pageviews + 1
        return (
            self.db.query(AnalyticsSession)
            .filter(AnalyticsSession.app_id == app_pk, AnalyticsSession.session_id == session_id)
            .update(values, synchronize_session=False)
        )

    def _bump_daily_stats(self, app: App, fingerprint: Optional[str]):
        today = _utcnow().date()
        if self._increment_daily_stats(app.id, today):
            return

        try:
            with self.db.begin_nested():
                self.db.add(DailyStats(
                    app_id=app.id,
                    date=today,
                    pageviews=1,
                    unique_users=1 if fingerprint else 0,
                    sessions=1,
                ))
        except IntegrityError:
            # first pageview of the day was recorded concurrently
            self._increment_daily_stats(app.id, today)

    def _increment_daily_stats(self, app_pk: UUID, day: date) -> int:
        return (
            self.db.query(DailyStats)
            .filter(DailyStats.app_id == app_pk, DailyStats.date == day)
            .update({DailyStats.pageviews: DailyStats.pageviews + 1}, synchronize_session=False)
        )

    async def _forward_to_meta(self, app: App, app_settings: AppSettings, event: Event, payload: TrackRequest):
        if not app_settings.meta_pixel_id or not app_settings.meta_access_token:
            return

        event_data: Dict[str, Any] = {
            "event_id": event.id,
            "event_name": event.event_name,
            "url": event.url,
            "ip_address": event.ip_address,
            "user_agent": event.user_agent,
            "city": event.city,
            "region": event.region,
            "country_code": event.country_code,
            "fingerprint": payload.fingerprint or payload.visitor_id,
            "email": payload.email,
            "phone": payload.phone,
            "fbc": payload.fbc,
            "fbp": payload.fbp,
            "value": event.value,
            "currency": event.currency,
            "product_id": event.product_id,
            "product_name": event.product_name,
            "quantity": event.quantity,
            "custom_data": payload.properties,
        }

        try:
            await meta_service.send_events(
                app_settings.meta_pixel_id,
                decrypt_token(app_settings.meta_access_token),
                [meta_service.map_to_meta_event(event_data)],
                app_settings.meta_test_event_code,
            )
        except MetaApiError as e:
            track_error("meta_capi.rejected", app_id=app.app_id, metadata={"code": e.code, "error": e.message})
        except Exception as e:
            logger.error(f"Meta forwarding error for app {app.app_id}: {e}", exc_info=True)
