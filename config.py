import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()

EU_COUNTRIES = [
    "AT", "BE", "BG", "CY", "CZ", "DE", "DK", "EE", "ES", "FI", "FR", "GR",
    "HR", "HU", "IE", "IT", "LT", "LU", "LV", "MT", "NL", "PL", "PT", "RO",
    "SE", "SI", "SK",
]

PLATFORM_BILLED_BY = (
    "SC Extremely Distributed Technologies SRL\n"
    "Transilvaniei St. 18, bl. U2, ap. 111\n"
    "Oradea, Romania\n"
    "Nr. ORC/Reg. Number: J05/197/2021\n"
    "Cod TVA/VAT Code: RO43621869\n"
    "EUID: ROONRC.J05/197/2021"
)


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    MIGRATION_DB_URI = data.get("MIGRATION_DB_URI", "sqlite:///./test.db")
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Tax
    PLATFORM_COUNTRY = data.get("PLATFORM_COUNTRY", "RO")
    VAT_PERCENTAGE = data.get("VAT_PERCENTAGE", 19)
    EU_COUNTRIES = data.get("EU_COUNTRIES", EU_COUNTRIES)
    PLATFORM_BILLED_BY = data.get("PLATFORM_BILLED_BY", PLATFORM_BILLED_BY)

    # Exchange rate (RON per EUR x100)
    BNR_RATES_URL = data.get("BNR_RATES_URL", "https://www.bnr.ro/nbrfxrates.xml")
    DEFAULT_EUR_TO_RON = data.get("DEFAULT_EUR_TO_RON", 492)

    # Payment gateway
    STRIPE_API_URL = data.get("STRIPE_API_URL", "https://api.stripe.com/v1")
    STRIPE_API_TOKEN = data.get("STRIPE_API_TOKEN", "")
    GATEWAY_TIMEOUT = data.get("GATEWAY_TIMEOUT", 30.0)  # Seconds
    PAYMENT_CURRENCY = data.get("PAYMENT_CURRENCY", "eur")

    # Settlement
    MINIMUM_PAYABLE_AMOUNT = data.get("MINIMUM_PAYABLE_AMOUNT", 108 * 100)  # Cents
    SETTLEMENT_ENABLED = bool(data.get("SETTLEMENT_ENABLED", True))
    SETTLEMENT_INTERVAL_SECONDS = data.get("SETTLEMENT_INTERVAL_SECONDS", 86400)  # Daily

    # Election (None = seeded from the OS)
    ELECTION_RANDOM_SEED = data.get("ELECTION_RANDOM_SEED", None)
