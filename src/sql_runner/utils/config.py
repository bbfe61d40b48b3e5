# src/sql_runner/utils/config.py
"""
Process-wide settings, read from the environment and an optional .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SQL_RUNNER_",
        env_ignore_empty=True,
        extra="ignore",
    )

    log_level: str = "INFO"
    log_file: str = "logs/sql_runner.log"

    # Seconds to wait for a target connection before giving up
    connect_timeout: int = 10

    # Used when building mssql+pyodbc URLs
    odbc_driver: str = "ODBC Driver 17 for SQL Server"

    def __repr__(self):
        return f"<AppConfig log_level={self.log_level} log_file={self.log_file}>"


# Singleton
app_config = AppConfig()
