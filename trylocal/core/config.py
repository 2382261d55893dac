import os
from typing import List
from dotenv import load_dotenv

# grab env vars from .env file
load_dotenv()


class Settings:
    # app settings
    APP_ENV: str = os.getenv("APP_ENV", "dev")
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "8000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # public URL of the web app, used for onboarding redirects
    APP_URL: str = os.getenv("APP_URL", "http://localhost:3000")

    # CORS stuff
    _origins_raw: str = os.getenv("ALLOWED_ORIGINS", "*")
    ALLOWED_ORIGINS: List[str] = [o.strip() for o in _origins_raw.split(",") if o.strip()] if _origins_raw else ["*"]

    # Stripe Connect
    PAYMENTS_PROVIDER: str = os.getenv("PAYMENTS_PROVIDER", "stripe")
    STRIPE_SECRET_KEY: str | None = os.getenv("STRIPE_SECRET_KEY")
    STRIPE_API_VERSION: str | None = os.getenv("STRIPE_API_VERSION")

    # business documents live in Firestore
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "firestore")
    FIREBASE_SERVICE_ACCOUNT: str | None = os.getenv("FIREBASE_SERVICE_ACCOUNT")
    GOOGLE_APPLICATION_CREDENTIALS: str | None = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    FIREBASE_PROJECT_ID: str | None = os.getenv("FIREBASE_PROJECT_ID")
    BUSINESSES_COLLECTION: str = os.getenv("BUSINESSES_COLLECTION", "businesses")

    # pickup scheduling, Gresham is on Pacific time
    BUSINESS_TIMEZONE: str = os.getenv("BUSINESS_TIMEZONE", "America/Los_Angeles")
    PICKUP_LEAD_MINUTES: int = int(os.getenv("PICKUP_LEAD_MINUTES", "30"))
    PICKUP_INTERVAL_MINUTES: int = int(os.getenv("PICKUP_INTERVAL_MINUTES", "30"))
    PICKUP_HORIZON_DAYS: int = int(os.getenv("PICKUP_HORIZON_DAYS", "1"))

    @property
    def onboarding_base_url(self) -> str:
        """where Stripe sends the owner back after onboarding"""
        return f"{self.APP_URL.rstrip('/')}/dashboard/business/stripe-onboarding"


settings = Settings()
