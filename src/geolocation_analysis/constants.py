# ==========================================
# 1. Analysis Environment Keys
# ==========================================
ENV_ACCESS_KEY_ID = "AWS_ACCESSKEYID"
ENV_SECRET_ACCESS_KEY = "AWS_SECRETACCESSKEY"
ENV_REGION = "AWS_REGION"
ENV_ACCURACY_THRESHOLD = "DESIREABLE_ACCURACY_PERCENT"

ENV_GNSS_SOLVER_VARIABLE = "GNSS_SOLVER_VARIABLE"
ENV_IP_ADDRESS_VARIABLE = "IP_ADDRESS_VARIABLE"
ENV_WIFI_ADDRESSES_VARIABLE = "WIFI_ADDRESSES_VARIABLE"

# Order in which missing required keys are reported
REQUIRED_ENV_KEYS = [
    ENV_REGION,
    ENV_ACCESS_KEY_ID,
    ENV_SECRET_ACCESS_KEY,
]

DEFAULT_ACCURACY_THRESHOLD = "0"

# ==========================================
# 2. Scope Variables
# ==========================================
DEFAULT_GNSS_SOLVER_VARIABLE = "gnss_solver"
DEFAULT_IP_ADDRESS_VARIABLE = "ip_addresses"
DEFAULT_WIFI_ADDRESSES_VARIABLE = "wifi_addresses"

IP_ADDRESS_SEPARATOR = ";"
WIFI_ACCESS_POINTS_USED = 2

# ==========================================
# 3. Device Update
# ==========================================
ESTIMATED_LOCATION_VARIABLE = "estimated_location"
VALUE_ACCURATE = "accurate"
VALUE_NOT_ACCURATE = "not accurate"
COLOR_ACCURATE = "green"
COLOR_NOT_ACCURATE = "red"

# ==========================================
# 4. Process Environment (platform boundary)
# ==========================================
ENV_ANALYSIS_TOKEN = "T_ANALYSIS_TOKEN"
ENV_TAGOIO_API = "TAGOIO_API"
ENV_LOG_MODE = "LOG_MODE"

DEFAULT_TAGOIO_API = "https://api.tago.io"
HTTP_TIMEOUT = 10  # seconds

LOGGER_NAME = "geolocation_analysis"
