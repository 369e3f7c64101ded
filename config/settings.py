from dotenv import load_dotenv
import os

load_dotenv()

# http facade
API_KEY = os.getenv("API_KEY")
ENABLE_CORS = os.getenv("ENABLE_CORS") == "true"
CORS_ALLOW_ORIGINS = [o for o in os.getenv("CORS_ALLOW_ORIGINS", "").split(",") if o]
ALLOWED_HOSTS = [h for h in os.getenv("ALLOWED_HOSTS", "").split(",") if h] or ["*"]
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", "0"))  # 0 = no limit

# data sources
USE_ERP_SOURCE = os.getenv("USE_ERP_SOURCE") == "true"
ERP_CREWS_BASE_URL = os.getenv("ERP_CREWS_BASE_URL", "")
ERP_ACCESS_TOKEN = os.getenv("ERP_ACCESS_TOKEN")
ERP_TIMEOUT = float(os.getenv("ERP_TIMEOUT", "30"))
SEED_DATA_PATH = os.getenv("SEED_DATA_PATH") or None

# logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
