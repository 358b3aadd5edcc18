from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # MongoDB Configuration
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "demoshop"
    
    # Application Settings
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5000"]
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Demo Shop"
    LOG_LEVEL: str = "INFO"
    
    # Storefront client
    API_BASE_URL: str = "http://localhost:5000"
    REQUEST_TIMEOUT: Optional[float] = None  # No client-side timeout by default
    
    # Cart persistence
    CART_STORAGE_PATH: str = ".demoshop/storage.json"
    CART_STORAGE_KEY: str = "cart"
    
    # Checkout
    CHECKOUT_SUCCESS_DELAY: float = 2.0  # Seconds the success message stays before the cart is cleared
    
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
