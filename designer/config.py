"""
Configuration settings for the Workflow Designer.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""
    
    # Application
    APP_NAME: str = "Workflow Designer"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    
    # Register the sample onboarding workflow on startup
    REGISTER_DEMO_WORKFLOW: bool = True
    
    # Simulation client
    SIMULATION_BASE_URL: str = "http://localhost:8000"
    CLIENT_TIMEOUT: float = 10.0  # Seconds
    
    # Logging
    LOG_LEVEL: str = "INFO"
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
