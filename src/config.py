"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string
        secret_key: Secret key for JWT token encoding
        algorithm: Algorithm used for JWT encoding (typically HS256)
        access_token_expire_minutes: Access token lifetime in minutes (24 hours)

        # Email settings
        mail_username: SMTP server username
        mail_password: SMTP server password
        mail_from: Sender email address
        mail_port: SMTP server port
        mail_server: SMTP server hostname
        mail_starttls: Whether to use STARTTLS
        mail_ssl_tls: Whether to use SSL/TLS
        use_credentials: Whether to use credentials for SMTP
        validate_certs: Whether to validate certificates
        admin_email: Recipient of new registration notices

        # Frontend settings
        app_url: Public URL included in approval emails
        cors_origins: Origins allowed by the CORS middleware

        # Bootstrap admin settings (optional)
        bootstrap_admin_username: Username for the first admin account
        bootstrap_admin_email: Email for the first admin account
        bootstrap_admin_password: Password for the first admin account

        # Push channel settings
        sse_ping_interval: Seconds between keep-alive pings on /events
        sse_queue_size: Events buffered per connection before it is dropped
    """
    # Database settings
    database_url: str = "sqlite:///./mmgh.db"

    # JWT settings
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Email settings (all optional - email is skipped when not configured)
    mail_username: Optional[str] = None
    mail_password: Optional[str] = None
    mail_from: Optional[str] = None
    mail_port: int = 587
    mail_server: Optional[str] = None
    mail_starttls: bool = True
    mail_ssl_tls: bool = False
    use_credentials: bool = True
    validate_certs: bool = True
    admin_email: str = "admin@mmgh.local"

    # Frontend settings
    app_url: str = "http://localhost:3000"
    cors_origins: List[str] = ["*"]

    # Bootstrap admin settings (optional - only used for first admin creation)
    bootstrap_admin_username: str = "admin"
    bootstrap_admin_email: Optional[str] = None
    bootstrap_admin_password: Optional[str] = None

    # Push channel settings
    sse_ping_interval: int = 15
    sse_queue_size: int = 100

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def email_configured(self) -> bool:
        """True when every setting required to reach the SMTP server is present."""
        return all([self.mail_username, self.mail_password, self.mail_from, self.mail_server])

# Create settings instance
settings = Settings()
