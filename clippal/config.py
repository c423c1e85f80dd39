import os
from pathlib import Path

# Application Name
APP_NAME = "clippal"

# Determine base directory for configuration using XDG Base Directory Spec if possible
XDG_CONFIG_HOME = os.environ.get('XDG_CONFIG_HOME')
if XDG_CONFIG_HOME:
    APP_DIR = Path(XDG_CONFIG_HOME) / APP_NAME
else:
    # Fallback to default ~/.config/appname
    APP_DIR = Path.home() / ".config" / APP_NAME

# Plain text history file, one entry per line
HISTORY_FILE = APP_DIR / "clipboard_history.txt"
HISTORY_MAX_SIZE = 1000 # Max number of distinct entries to keep
RECENT_WINDOW_DAYS = 7 # Entries used within this window survive trimming first
FIELD_SEPARATOR = "|"
MAX_TIMESTAMP = 253402300799 # 9999-12-31 23:59:59 UTC, the last second datetime can show

# Poller Configuration
CHECK_INTERVAL = 0.8 # Seconds between clipboard samples

# Picker Configuration
MAX_DISPLAY = 15 # Max entries rendered per screen
TITLE_PREVIEW_WIDTH = 60
SNIPPET_PREVIEW_WIDTH = 40

# Fuzzy matcher scores (lower is better)
NO_MATCH_SCORE = 10000
SUBSEQUENCE_BASE_SCORE = 5000
