import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./rental.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = data.get("API_RELOAD", False)
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Branding / document surface
    COMPANY_NAME = data.get("COMPANY_NAME", "C2C Car Rental")
    COMPANY_CONTACT_LINE = data.get(
        "COMPANY_CONTACT_LINE",
        "Surrey, BC  |  Contact: (604) 771-3995  |  24/7 Support: (778) 580-0498",
    )
    CURRENCY = data.get("CURRENCY", "CAD")
    LOGO_PATH = data.get("LOGO_PATH", os.path.join(ROOT_PATH, "assets", "logo.png"))
    ASSET_FETCH_TIMEOUT_SECONDS = data.get("ASSET_FETCH_TIMEOUT_SECONDS", 10.0)
    AGREEMENT_FILENAME_PREFIX = data.get("AGREEMENT_FILENAME_PREFIX", "C2C-Rental")

    # Taxes and regulatory fees
    PST_RATE = data.get("PST_RATE", "0.07")
    GST_RATE = data.get("GST_RATE", "0.05")
    PVRT_DAILY_FEE = data.get("PVRT_DAILY_FEE", "1.50")  # Passenger vehicle rental tax, $ per day
    ACSRCH_DAILY_FEE = data.get("ACSRCH_DAILY_FEE", "1.00")  # Airport/concession surcharge, $ per day

    # Fallback rates when system_settings cannot be read
    ADDITIONAL_DRIVER_DAILY_RATE_STANDARD = data.get("ADDITIONAL_DRIVER_DAILY_RATE_STANDARD", "14.99")
    ADDITIONAL_DRIVER_DAILY_RATE_YOUNG = data.get("ADDITIONAL_DRIVER_DAILY_RATE_YOUNG", "19.99")
    PROTECTION_GROUP_RATES = data.get(
        "PROTECTION_GROUP_RATES",
        {
            1: {"basic": "32.99", "smart": "37.99", "premium": "49.99"},
            2: {"basic": "52.99", "smart": "57.99", "premium": "69.99"},
            3: {"basic": "64.99", "smart": "69.99", "premium": "82.99"},
        },
    )

    # Charge reconciliation
    RECONCILIATION_SANITY_MULTIPLIER = data.get("RECONCILIATION_SANITY_MULTIPLIER", 10)
    SUBTOTAL_TOLERANCE_CENTS = data.get("SUBTOTAL_TOLERANCE_CENTS", 1)

    # Breakdown audit worker
    BREAKDOWN_AUDIT_ENABLED = bool(data.get("BREAKDOWN_AUDIT_ENABLED", True))
    BREAKDOWN_AUDIT_INTERVAL_SECONDS = data.get("BREAKDOWN_AUDIT_INTERVAL_SECONDS", 86400)  # Daily
    BREAKDOWN_AUDIT_BATCH_SIZE = data.get("BREAKDOWN_AUDIT_BATCH_SIZE", 200)
