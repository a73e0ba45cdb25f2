"""Centralized configuration — all env vars in one place."""

import os

DEFAULT_CORS_ORIGINS = "https://swissfunded-demo.vercel.app,http://localhost:3000"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.port: int = int(os.getenv("PORT", "3001"))
        self.cors_origins: list[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
            if origin.strip()
        ]
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of configuration problems (empty when all is well)."""
        problems = []
        if not 0 < self.port < 65536:
            problems.append(f"PORT {self.port} is outside 1-65535")
        if not self.cors_origins:
            problems.append("CORS_ORIGINS is empty; browsers will reject cross-origin reads")
        if "*" in self.cors_origins:
            problems.append("CORS_ORIGINS contains '*', which browsers refuse with credentials")
        return problems


settings = Settings()
