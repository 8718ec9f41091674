"""
Meta (Facebook) integration endpoints: OAuth code exchange and
pixel credential validation.
"""
import logging
import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from pixeltrack.core.database import get_db
from pixeltrack.core.errors import PixelTrackError, ValidationError
from pixeltrack.models.app import AppSettings
from pixeltrack.schemas.meta import TokenExchangeRequest, TokenExchangeResponse, MetaValidateRequest
from pixeltrack.services import meta_service
from pixeltrack.services.app_service import AppService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/facebook/exchange-token", response_model=TokenExchangeResponse)
async def exchange_token(body: TokenExchangeRequest):
    """
    Exchange an OAuth authorization code for a Meta access token.
    Nothing is stored; the token is relayed to the caller.

    Args:
        body: {code, redirectUri}

    Returns:
        {"accessToken": ...}
    """
    if not body.code:
        raise ValidationError("No authorization code provided")

    try:
        access_token = await meta_service.exchange_code_for_token(body.code, body.redirect_uri)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Token exchange error: {e}", exc_info=True)
        raise PixelTrackError("Failed to exchange authorization code") from e

    return {"access_token": access_token}


@router.post("/meta/validate")
async def validate_meta_credentials(
    body: MetaValidateRequest,
    db: Session = Depends(get_db)
):
    """
    Validate a Meta dataset (pixel) id and access token.
    When appSettingsId is given and the credentials work, they are saved
    and Meta forwarding is switched on for that app.

    Returns:
        {"valid": true, "datasetName": ...} or {"valid": false, "error": ...}
    """
    if not body.dataset_id:
        raise ValidationError("Dataset ID (App ID) is required")
    if not body.access_token:
        raise ValidationError("Access Token is required")

    try:
        result = await meta_service.validate_credentials(body.dataset_id, body.access_token)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Meta validation error: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"valid": False, "error": "Validation failed"})

    if not result["valid"]:
        return {"valid": False, "error": result.get("error") or "Invalid credentials"}

    if body.app_settings_id:
        app_settings = db.query(AppSettings).filter(AppSettings.id == body.app_settings_id).first()
        if app_settings:
            AppService(db).update_app_settings(app_settings.app_id, {
                "meta_pixel_id": body.dataset_id,
                "meta_access_token": body.access_token,
                "meta_verified": True,
                "meta_pixel_enabled": True,
            })
        else:
            logger.warning(f"Meta validation: settings {body.app_settings_id} not found, nothing saved")

    return {
        "valid": True,
        "datasetName": result.get("dataset_name"),
        "message": "Credentials verified successfully",
    }
