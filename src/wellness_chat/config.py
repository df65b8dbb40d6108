"""Shared configuration for the wellness chat service.

Values come from the environment (optionally a ``.env`` file at the project
root).  The renderer itself reads none of these; it is a pure function.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

# Outgoing messages longer than this are cut and suffixed with "..."
MAX_MESSAGE_LENGTH = int(os.getenv("WELLNESS_MAX_MESSAGE_LENGTH", "2000"))

# Web server bind address
HOST = os.getenv("WELLNESS_HOST", "0.0.0.0")
PORT = int(os.getenv("WELLNESS_PORT", "8000"))

# Canned replies used when the AI backend cannot answer
TOO_LARGE_REPLY = (
    "Your message is a bit too detailed for me to process right now. "
    "Could you try asking in a shorter, more concise way? I'm here to help! \U0001f499"
)
CONNECTION_TROUBLE_REPLY = "I'm having trouble connecting right now. But I'm here for you. Would you like to try again?"
