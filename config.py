import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Application settings
    app_name: str = os.getenv("APP_NAME", "LibraNet Library Management System")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "WARNING")

    # Circulation rules
    fine_rate: float = float(os.getenv("FINE_RATE", "10.0"))  # per day overdue
    borrow_period_days: int = int(os.getenv("BORROW_PERIOD_DAYS", "14"))
    currency_label: str = os.getenv("CURRENCY_LABEL", "rs")

    # Catalog start-up
    seed_sample_items: bool = _env_bool("SEED_SAMPLE_ITEMS", "True")

    # CLI output: plain | json | rich
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain")


settings = Settings()
