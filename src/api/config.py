"""API configuration for local development."""

from __future__ import annotations

import os
import logging
import sys

from dotenv import load_dotenv

from src.utils.constants import (
    DEFAULT_LOGIN_TIMEOUT_SECONDS,
    DEFAULT_ODBC_DRIVER,
    DEFAULT_QUERY_TIMEOUT_SECONDS,
    NEO4J_DEFAULT_DATABASE,
)

load_dotenv()

# Configure logger for configuration validation
logger = logging.getLogger(__name__)


class LocalConfig:
    """Local development configuration.

    Manages environment-based configuration for all services:
    - Neo4j (graph database holding users, data sources, mappings and
      the explored graph)
    - SQL Server introspection (ODBC)
    - Security (JWT, CORS, rate limits)
    """

    # Environment mode
    ENVIRONMENT = os.getenv(
        "ENVIRONMENT", "development"
    )  # development, staging, production

    # Security settings
    # Development default secret - MUST be overridden in production
    _DEV_JWT_SECRET = "dev-only-secret-key-do-not-use-in-production-32chars"
    JWT_SECRET_KEY = os.getenv(
        "JWT_SECRET_KEY",
        (
            _DEV_JWT_SECRET
            if os.getenv("ENVIRONMENT", "development") != "production"
            else ""
        ),
    )
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))
    JWT_REQUIRED = (
        os.getenv("JWT_REQUIRED", "true").lower() == "true"
    )  # Set to false to allow anonymous access in development

    # CORS settings
    ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            "ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"
        ).split(",")
        if origin.strip()
    ]

    # Neo4j settings
    NEO4J_URI = os.getenv("NEO4J_URI", "bolt://localhost:7687")
    NEO4J_USERNAME = os.getenv("NEO4J_USERNAME", "neo4j")
    NEO4J_PASSWORD = os.getenv("NEO4J_PASSWORD", "")  # REQUIRED in production
    NEO4J_DATABASE = os.getenv("NEO4J_DATABASE", NEO4J_DEFAULT_DATABASE)
    CYPHER_QUERY_TIMEOUT_SECONDS = float(
        os.getenv("CYPHER_QUERY_TIMEOUT_SECONDS", str(DEFAULT_QUERY_TIMEOUT_SECONDS))
    )

    # SQL Server introspection settings
    MSSQL_ODBC_DRIVER = os.getenv("MSSQL_ODBC_DRIVER", DEFAULT_ODBC_DRIVER)
    MSSQL_LOGIN_TIMEOUT_SECONDS = int(
        os.getenv("MSSQL_LOGIN_TIMEOUT_SECONDS", str(DEFAULT_LOGIN_TIMEOUT_SECONDS))
    )

    # Rate limiting
    RATE_LIMIT_AUTH = os.getenv("RATE_LIMIT_AUTH", "5/minute")
    RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")

    # Error reporting: include store/driver messages in 500 responses
    EXPOSE_STORE_ERRORS = (
        os.getenv(
            "EXPOSE_STORE_ERRORS",
            "false" if os.getenv("ENVIRONMENT", "development") == "production" else "true",
        ).lower()
        == "true"
    )

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate_production_config(cls) -> None:
        """Validate that required configuration is set for production deployment.

        Raises:
            SystemExit: If required production configuration is missing.
        """
        if cls.ENVIRONMENT != "production":
            logger.info(
                f"Running in {cls.ENVIRONMENT} mode - skipping strict validation"
            )
            return

        errors = []

        # Required credentials
        if not cls.NEO4J_PASSWORD:
            errors.append(
                "NEO4J_PASSWORD must be set via environment variable in production"
            )

        if not cls.JWT_SECRET_KEY:
            errors.append(
                "JWT_SECRET_KEY must be set via environment variable in production"
            )
        elif len(cls.JWT_SECRET_KEY) < 32:
            errors.append("JWT_SECRET_KEY must be at least 32 characters for security")

        # CORS validation
        if not cls.ALLOWED_ORIGINS or cls.ALLOWED_ORIGINS == ["*"]:
            errors.append(
                "ALLOWED_ORIGINS must be explicitly configured (wildcards not allowed in production)"
            )

        if errors:
            error_msg = "Production configuration validation failed:\n" + "\n".join(
                f"  - {e}" for e in errors
            )
            logger.error(error_msg)
            sys.exit(1)

        logger.info("Production configuration validated successfully")

    @staticmethod
    def mask_sensitive(value: str, visible_chars: int = 4) -> str:
        """Mask sensitive configuration values for logging.

        Args:
            value: The sensitive value to mask
            visible_chars: Number of characters to show at the end

        Returns:
            Masked string like "***xyz" or "***" if value is too short
        """
        if not value or len(value) <= visible_chars:
            return "***"
        return "*" * (len(value) - visible_chars) + value[-visible_chars:]


config = LocalConfig()

# Validate production configuration on module import
if config.ENVIRONMENT == "production":
    config.validate_production_config()
