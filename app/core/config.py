from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import List, Literal, Optional

load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./travel_companion.db"
    SQL_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = True

    # Identity provider: "firebase" verifies Firebase ID tokens,
    # "jwt" verifies locally signed tokens (development and tests)
    IDENTITY_PROVIDER: Literal["firebase", "jwt"] = "firebase"

    FIREBASE_CREDENTIALS_FILE: Optional[str] = None
    FIREBASE_TYPE: str = "service_account"
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_PRIVATE_KEY_ID: Optional[str] = None
    FIREBASE_PRIVATE_KEY: Optional[str] = None
    FIREBASE_CLIENT_EMAIL: Optional[str] = None
    FIREBASE_CLIENT_ID: Optional[str] = None
    FIREBASE_AUTH_URI: str = "https://accounts.google.com/o/oauth2/auth"
    FIREBASE_TOKEN_URI: str = "https://oauth2.googleapis.com/token"
    FIREBASE_AUTH_PROVIDER_X509_CERT_URL: str = "https://www.googleapis.com/oauth2/v1/certs"
    FIREBASE_CLIENT_X509_CERT_URL: Optional[str] = None
    FIREBASE_UNIVERSE_DOMAIN: str = "googleapis.com"

    JWT_SECRET_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = None
    JWT_ISSUER: Optional[str] = None

    # "log" keeps serving the request when the local user row can't be written,
    # "fail" turns that into a 500
    USER_SYNC_FAILURE_POLICY: Literal["log", "fail"] = "log"

    # Answer 404 instead of 403 when a resource belongs to someone else
    CONCEAL_FOREIGN_RESOURCES: bool = True

    BACKEND_CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    PROJECT_NAME: str = "Travel Companion API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Trips, destinations, photos and traveller profiles"

    class Config:
        env_file = ".env"
        extra = "ignore"

    def firebase_certificate(self) -> dict:
        """Service-account dict assembled from the FIREBASE_* variables."""
        private_key = self.FIREBASE_PRIVATE_KEY or ""
        return {
            "type": self.FIREBASE_TYPE,
            "project_id": self.FIREBASE_PROJECT_ID,
            "private_key_id": self.FIREBASE_PRIVATE_KEY_ID,
            "private_key": private_key.replace("\\n", "\n"),
            "client_email": self.FIREBASE_CLIENT_EMAIL,
            "client_id": self.FIREBASE_CLIENT_ID,
            "auth_uri": self.FIREBASE_AUTH_URI,
            "token_uri": self.FIREBASE_TOKEN_URI,
            "auth_provider_x509_cert_url": self.FIREBASE_AUTH_PROVIDER_X509_CERT_URL,
            "client_x509_cert_url": self.FIREBASE_CLIENT_X509_CERT_URL,
            "universe_domain": self.FIREBASE_UNIVERSE_DOMAIN,
        }


settings = Settings()
