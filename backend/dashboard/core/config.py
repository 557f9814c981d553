from pydantic_settings import BaseSettings
from pydantic import Field, model_validator
from typing import List, Optional
from pathlib import Path
import json

DEFAULT_SESSION_SECRET = "devsecret"


class Settings(BaseSettings):
    app_name: str = Field(default="Admin Dashboard API", alias="APP_NAME")
    env: str = Field(default="dev", alias="ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    # Session tokens are minted by the identity provider; we only verify them.
    session_secret: str = Field(default=DEFAULT_SESSION_SECRET, alias="SESSION_SECRET")
    session_algorithm: str = Field(default="HS256", alias="SESSION_ALGORITHM")
    session_audience: Optional[str] = Field(default="authenticated", alias="SESSION_AUDIENCE")
    session_cookie_name: str = Field(default="sb-access-token", alias="SESSION_COOKIE_NAME")
    signup_token_ttl_minutes: int = Field(default=30, alias="SIGNUP_TOKEN_TTL_MINUTES")
    cors_origins_raw: Optional[str] = Field(default=None, alias="CORS_ORIGINS", description="Comma or JSON list of allowed CORS origins")
    # Dev convenience: user id that gets a SUPERADMIN profile on startup
    seed_superadmin_user_id: Optional[str] = Field(default=None, alias="SEED_SUPERADMIN_USER_ID")

    class Config:
        # Load env from backend/.env regardless of CWD
        env_file = str(Path(__file__).resolve().parents[2] / ".env")
        case_sensitive = False
        extra = "ignore"

    @model_validator(mode="after")
    def _require_session_secret_in_prod(self):
        # Session tokens signed with the public default are forgeable
        if self.env.lower() == "prod" and self.session_secret.strip() in {"", DEFAULT_SESSION_SECRET}:
            raise ValueError("SESSION_SECRET must be set to the identity provider secret when ENV=prod")
        return self

    def _parse_list(self, v: Optional[str]) -> List[str]:
        if v is None:
            return []
        s = v.strip()
        if not s:
            return []
        if s.startswith("[") and s.endswith("]"):
            try:
                loaded = json.loads(s)
            except json.JSONDecodeError:
                loaded = None
            if isinstance(loaded, list):
                return [str(e).strip() for e in loaded if str(e).strip()]
        return [e.strip() for e in s.split(",") if e.strip()]

    @property
    def cors_origins(self) -> List[str]:
        items = self._parse_list(self.cors_origins_raw)
        # Vite dev server defaults
        if not items:
            return ["http://localhost:5173", "http://127.0.0.1:5173"]
        return items

    @property
    def is_dev(self) -> bool:
        return self.env.lower() in {"dev", "development"}


settings = Settings()  # type: ignore
