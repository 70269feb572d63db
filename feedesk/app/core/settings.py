import os


class Settings:
    def __init__(self):
        self.app_name = "Fee Desk"
        self.api_version = "1.0.0"
        self.environment = os.getenv("FEEDESK_ENVIRONMENT", "development")
        self.database_url = os.getenv("FEEDESK_DATABASE_URL", "sqlite:///./feedesk.db")
        self.log_level = os.getenv("FEEDESK_LOG_LEVEL", "INFO")
        self.cors_origins = [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]

        self.invoice_prefix = "INV-"
        self.invoice_number_width = 4
        self.initial_fee_rows = 3
        # fits the Integer amount columns on every supported database
        self.max_amount = 2_147_483_647

        self.dashboard_months = 6
        self.dashboard_days = 7
        self.dashboard_top_n = 5


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
