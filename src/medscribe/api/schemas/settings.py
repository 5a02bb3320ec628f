"""API settings schemas. Keys are masked unless explicitly revealed."""

from typing import List, Optional

from pydantic import BaseModel, Field, validator

from ...core.utils.string_utils import mask_secret
from ...domain.entities.api_settings import ApiSettings


class ApiSettingsResponse(BaseModel):
    speech_key: str
    speech_region: str
    openai_endpoint: str
    openai_key: str
    openai_deployment: str
    openai_api_version: str
    keys_revealed: bool = Field(False, description="False when keys are masked")
    speech_configured: bool
    completion_configured: bool
    supported_regions: List[str] = Field(default_factory=list)

    @classmethod
    def from_settings(
        cls, settings: ApiSettings, reveal: bool = False, supported_regions: Optional[List[str]] = None
    ) -> "ApiSettingsResponse":
        def show(value: str) -> str:
            return value if reveal else mask_secret(value)

        return cls(
            speech_key=show(settings.speech_key),
            speech_region=settings.speech_region,
            openai_endpoint=settings.openai_endpoint,
            openai_key=show(settings.openai_key),
            openai_deployment=settings.openai_deployment,
            openai_api_version=settings.openai_api_version,
            keys_revealed=reveal,
            speech_configured=not settings.missing_speech_fields(),
            completion_configured=not settings.missing_completion_fields(),
            supported_regions=list(supported_regions or []),
        )


class ApiSettingsUpdateRequest(BaseModel):
    """Fields left out (null) keep their saved value, so masked keys need not be resent."""

    speech_key: Optional[str] = None
    speech_region: Optional[str] = None
    openai_endpoint: Optional[str] = None
    openai_key: Optional[str] = None
    openai_deployment: Optional[str] = None
    openai_api_version: Optional[str] = None

    @validator("speech_key", "speech_region", "openai_endpoint", "openai_key", "openai_deployment", "openai_api_version")
    def strip_value(cls, v):
        return v.strip() if isinstance(v, str) else v

    @validator("speech_region")
    def validate_region(cls, v):
        """Validate Azure region format."""
        if v and not v.replace("-", "").replace("_", "").isalnum():
            raise ValueError("Invalid Azure region format")
        return v

    @validator("openai_endpoint")
    def validate_endpoint(cls, v):
        if v and not v.startswith(("https://", "http://")):
            raise ValueError("Endpoint must be an http(s) URL")
        return v

    def apply_to(self, current: ApiSettings) -> ApiSettings:
        def pick(new: Optional[str], old: str) -> str:
            return old if new is None else new

        return ApiSettings(
            speech_key=pick(self.speech_key, current.speech_key),
            speech_region=pick(self.speech_region, current.speech_region),
            openai_endpoint=pick(self.openai_endpoint, current.openai_endpoint),
            openai_key=pick(self.openai_key, current.openai_key),
            openai_deployment=pick(self.openai_deployment, current.openai_deployment),
            openai_api_version=pick(self.openai_api_version, current.openai_api_version),
        )
