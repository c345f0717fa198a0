"""
Configuration management for the movie catalog.

Loads configuration from environment variables and provides
a centralized Config dataclass for all settings.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


@dataclass
class Config:
    """Centralized configuration from environment variables."""

    # Database
    db_uri: str
    db_name: str = "movies"
    db_timeout_ms: int = 5000

    # JWT settings
    jwt_secret_key: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Optional-auth routes that should require a token in this deployment
    protected_routes: List[str] = field(default_factory=list)

    # Paths
    log_dir: Path = field(default_factory=lambda: Path.cwd() / "logs")

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "Config":
        """
        Load configuration from environment variables.

        Args:
            env_path: Optional path to .env file. If not provided,
                     looks for .env in monorepo root, then current directory.

        Returns:
            Config instance with loaded values.

        Raises:
            ValueError: If required environment variables are missing.
        """
        if env_path:
            load_dotenv(env_path)
        else:
            # Try monorepo root first (../../../.env from this file)
            root_env = Path(__file__).parent.parent.parent.parent / ".env"
            if root_env.exists():
                load_dotenv(root_env)
            else:
                load_dotenv()

        # Required variables
        db_uri = os.getenv("DB")
        jwt_secret_key = os.getenv("SECRET_KEY")

        if not db_uri:
            raise ValueError("DB environment variable is required")
        if not jwt_secret_key:
            raise ValueError("SECRET_KEY environment variable is required")

        db_name = os.getenv("DB_NAME", "movies")
        db_timeout_ms = int(os.getenv("DB_TIMEOUT_MS", "5000"))

        jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
        jwt_expire_minutes = int(os.getenv("JWT_EXPIRE_MINUTES", "60"))

        api_host = os.getenv("HOST", "0.0.0.0")
        api_port = int(os.getenv("PORT", "8080"))

        routes_str = os.getenv("PROTECTED_ROUTES", "")
        protected_routes = [r.strip() for r in routes_str.split(",") if r.strip()]

        log_dir = Path(os.getenv("LOG_DIR", Path.cwd() / "logs"))

        return cls(
            db_uri=db_uri,
            db_name=db_name,
            db_timeout_ms=db_timeout_ms,
            jwt_secret_key=jwt_secret_key,
            jwt_algorithm=jwt_algorithm,
            jwt_expire_minutes=jwt_expire_minutes,
            api_host=api_host,
            api_port=api_port,
            protected_routes=protected_routes,
            log_dir=log_dir,
        )

    def is_route_protected(self, route_name: str) -> bool:
        """Check whether an optional-auth route is gated in this deployment."""
        return route_name in self.protected_routes
