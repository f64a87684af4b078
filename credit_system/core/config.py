import os

from dotenv import load_dotenv

# Carrega o .env da raiz do projeto
load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./credit_application.db")
ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Regras de negócio do crédito
CREDIT_MAX_INSTALLMENTS = int(os.getenv("CREDIT_MAX_INSTALLMENTS", "48"))
CREDIT_MAX_FIRST_INSTALLMENT_MONTHS = int(os.getenv("CREDIT_MAX_FIRST_INSTALLMENT_MONTHS", "3"))

# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


def is_truthy(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def is_falsy(value: str) -> bool:
    return value.strip().lower() in _FALSY
