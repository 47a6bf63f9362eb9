import os
import sys

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Request limits
MAX_TEXT_LENGTH = 1024 * 1024   # characters
MAX_CUSTOM_RULES = 10
MAX_RULE_SIZE = 10 * 1024       # characters per rule file

# JSON can spend up to 12 bytes on one character (a \uXXXX\uXXXX surrogate pair)
JSON_BYTES_PER_CHAR = 12
BODY_OVERHEAD_BYTES = 64 * 1024


def max_body_bytes() -> int:
    """Largest raw body a request within the limits above can encode to."""
    chars = MAX_TEXT_LENGTH + MAX_CUSTOM_RULES * MAX_RULE_SIZE
    return chars * JSON_BYTES_PER_CHAR + BODY_OVERHEAD_BYTES


# Only these names may reach the generated .vale.ini
ALLOWED_STYLES = ("Google", "Microsoft", "RedHat")
CUSTOM_STYLE = "Custom"
RULE_EXTENSION = ".yml"

# Vale runtime
STYLES_PATH = os.getenv("VALE_STYLES_PATH", os.path.join(BASE_DIR, "styles"))
VALE_BIN = os.getenv(
    "VALE_BIN",
    os.path.join(BASE_DIR, "vale.exe" if sys.platform == "win32" else "vale"),
)
VALE_TIMEOUT = float(os.getenv("VALE_TIMEOUT", "30"))  # seconds
MIN_ALERT_LEVEL = "suggestion"

# None -> system temp dir
SANDBOX_DIR = os.getenv("VALE_SANDBOX_DIR") or None

# Server
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))
