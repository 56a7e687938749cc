from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str
    port: int
    debug: bool
    default_redirect_location: str  # Where an empty slug redirects, e.g. https://example.com
    session_secret_key: str | None = None  # Random per-process secret is generated when unset
    session_max_age: int = 14 * 24 * 60 * 60
    https_only: bool = False  # Mark the session cookie Secure
    base_url: str = "http://localhost:8080"  # Public origin, used to build the OAuth callback URL
    oauth_redirect_url: str | None = None  # Overrides {base_url}/oauth/callback
    google_client_id: str = ""
    google_client_secret: str = ""
    google_credentials_file: str | None = None  # Path to client_credentials.json downloaded from Google
    oauth_timeout_seconds: float = 10.0
    # Seed data written on startup (optional)
    seed_user_id: str | None = None
    seed_user_email: str = ""
    seed_user_picture: str = ""
    seed_links: dict[str, str] = {}

    model_config = {
        "env_file": [".env"],
        "env_prefix": "SHORTENER_",
        "extra": "ignore",
    }

    @property
    def callback_url(self) -> str:
        if self.oauth_redirect_url:
            return self.oauth_redirect_url
        return f"{self.base_url.rstrip('/')}/oauth/callback"
