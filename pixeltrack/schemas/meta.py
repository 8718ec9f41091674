"""
Pydantic schemas for the Meta (Facebook) integration endpoints
"""
from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID


class TokenExchangeRequest(BaseModel):
    code: Optional[str] = None
    redirect_uri: Optional[str] = Field(default=None, alias="redirectUri")

    class Config:
        populate_by_name = True


class TokenExchangeResponse(BaseModel):
    access_token: str = Field(serialization_alias="accessToken")


class MetaValidateRequest(BaseModel):
    dataset_id: Optional[str] = Field(default=None, alias="datasetId")
    access_token: Optional[str] = Field(default=None, alias="accessToken")
    app_settings_id: Optional[UUID] = Field(default=None, alias="appSettingsId")

    class Config:
        populate_by_name = True
