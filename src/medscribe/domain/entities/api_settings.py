"""Credentials and endpoints for the speech and completion services.

Treated as sensitive: never logged, and only ever sent to the service each
value belongs to.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from ..errors import ConfigurationMissingError


@dataclass(frozen=True)
class ApiSettings:
    """API settings document."""

    speech_key: str = ""
    speech_region: str = "eastus"
    openai_endpoint: str = ""
    openai_key: str = ""
    openai_deployment: str = "gpt-4.1"
    openai_api_version: str = "2024-08-01-preview"

    def missing_speech_fields(self) -> List[str]:
        missing = []
        if not self.speech_key:
            missing.append("speechKey")
        if not self.speech_region:
            missing.append("speechRegion")
        return missing

    def missing_completion_fields(self) -> List[str]:
        missing = []
        if not self.openai_endpoint:
            missing.append("openaiEndpoint")
        if not self.openai_key:
            missing.append("openaiKey")
        if not self.openai_deployment:
            missing.append("openaiDeployment")
        return missing

    def require_speech(self) -> None:
        missing = self.missing_speech_fields()
        if missing:
            raise ConfigurationMissingError("Azure Speech", missing)

    def require_completion(self) -> None:
        missing = self.missing_completion_fields()
        if missing:
            raise ConfigurationMissingError("Azure OpenAI", missing)

    @property
    def keys_configured(self) -> bool:
        """Both service keys present (drives the startup status line)."""
        return bool(self.speech_key and self.openai_key)

    def to_document(self) -> Dict[str, Any]:
        return {
            "speechKey": self.speech_key,
            "speechRegion": self.speech_region,
            "openaiEndpoint": self.openai_endpoint,
            "openaiKey": self.openai_key,
            "openaiDeployment": self.openai_deployment,
            "openaiApiVersion": self.openai_api_version,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "ApiSettings":
        defaults = cls()
        return cls(
            speech_key=doc.get("speechKey", defaults.speech_key) or "",
            speech_region=doc.get("speechRegion", defaults.speech_region) or "",
            openai_endpoint=doc.get("openaiEndpoint", defaults.openai_endpoint) or "",
            openai_key=doc.get("openaiKey", defaults.openai_key) or "",
            openai_deployment=doc.get("openaiDeployment", defaults.openai_deployment) or "",
            openai_api_version=doc.get("openaiApiVersion", defaults.openai_api_version) or "",
        )
