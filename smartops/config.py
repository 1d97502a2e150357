"""
Process-wide configuration, read once from the environment at import time.
"""

import os

SERVICE_NAME = os.environ.get("SERVICE_NAME", "Arbor Technologies SmartOps")

HOST = os.environ.get("HOST", "0.0.0.0")

# 8081 keeps clear of the usual 8000/8080 dev ports
PORT = int(os.environ.get("PORT", "8081"))

BROADCAST_INTERVAL_SECONDS = float(
    os.environ.get("BROADCAST_INTERVAL_SECONDS", "2.0")
)

CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Unset means contact submissions are only logged
CONTACT_WEBHOOK_URL = os.environ.get("CONTACT_WEBHOOK_URL") or None
CONTACT_WEBHOOK_TIMEOUT_SECONDS = float(
    os.environ.get("CONTACT_WEBHOOK_TIMEOUT_SECONDS", "5")
)
