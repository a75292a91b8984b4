"""
Design (config.py)
- Purpose: Centralize constants and configuration.
- Inputs: None.
- Outputs: Constants (URLs, timeouts, file names, UI text, log format).
- Side effects: None.
- Thread-safety: N/A (read-only constants).
"""

WINDOW_TITLE = "icanhazdadjoke?"

# Remote endpoint (one fixed GET, JSON only)
JOKE_API_URL = "https://icanhazdadjoke.com/"
REQUEST_TIMEOUT_SEC = 10
# icanhazdadjoke asks API consumers to send an identifying User-Agent
USER_AGENT = "dad-jokes desktop client"

# Shown until the first fetch resolves
PLACEHOLDER_JOKE_TEXT = "Loading a fresh dad joke..."

# Persistence: filename for saved favourites (path resolved in storage module)
APP_DIR_NAME = "Dad Jokes"          # Windows (%APPDATA%)
APP_DIR_SLUG = "dad-jokes"           # elsewhere (XDG data dir)
FAVOURITES_FILENAME = "savedFavourites.json"

# Maximum number of log lines kept in the Logs panel (oldest trimmed)
LOG_MAX_LINES = 1000
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
