"""Application configuration for autobib."""

from __future__ import annotations

from typing import Any

import requests
from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from autobib.core.models import BackendKind
from autobib.services.citation_service import ENTRY_TYPES


class AutobibConfig(BaseSettings):  # type: ignore[misc]
    """Settings selecting the backend and controlling outbound requests.

    Values are read from ``AUTOBIB_*`` environment variables or a ``.env`` file.
    Only the CLI and the package facade read this object; the pipeline receives
    the chosen backend as an explicit argument.
    """

    publication_database: BackendKind = Field(
        BackendKind.DBLP, description="Backend to search: 'DBLP' or 'Google Scholar'"
    )
    request_timeout_s: float = Field(
        10.0, gt=0, description="Timeout (in seconds) for outbound HTTP requests"
    )
    user_agent: str = Field("autobib", description="User-Agent header sent to backends")
    scholar_base_url: AnyHttpUrl = Field(
        "https://scholar.google.com", description="Base URL of the Google Scholar site"
    )
    dblp_base_url: AnyHttpUrl = Field(
        "https://dblp.org", description="Base URL of the DBLP search API"
    )
    entry_type: str = Field(
        "inproceedings", description="BibTeX entry type: 'inproceedings' or 'article'"
    )

    model_config = SettingsConfigDict(env_prefix="AUTOBIB_", env_file=".env", extra="ignore")

    @field_validator("publication_database", mode="before")
    @classmethod
    def validate_publication_database(cls, value: Any) -> BackendKind:
        try:
            return BackendKind(value)
        except ValueError as exc:
            raise ValueError("publication_database must be 'DBLP' or 'Google Scholar'") from exc

    @field_validator("entry_type")
    @classmethod
    def validate_entry_type(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in ENTRY_TYPES:
            raise ValueError(f"entry_type must be one of {', '.join(ENTRY_TYPES)}")
        return normalized

    def build_session(self, session: requests.Session | None = None) -> requests.Session:
        """Return a :class:`requests.Session` carrying the configured user agent."""

        session = session or requests.Session()
        if self.user_agent:
            session.headers["User-Agent"] = self.user_agent
        return session

    def client_kwargs(self) -> dict[str, Any]:
        return {
            "timeout": self.request_timeout_s,
            "scholar_base_url": str(self.scholar_base_url),
            "dblp_base_url": str(self.dblp_base_url),
        }
