"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

# Storage keys (same names as the browser kiosk so exported data loads as-is)
KEY_WORKERS = "siteSignIn.workers"
KEY_VISITS = "siteSignIn.visits"
KEY_SETTINGS = "siteSignIn.settings"
CORRUPT_SUFFIX = ".corrupt"

DEFAULT_SITE_NAME = "Selfridges – Concession Works"
DEFAULT_ADMIN_PIN = "1234"
DEFAULT_REQUIRE_INDUCTION = True
DEFAULT_REQUIRE_RAMS = True
DEFAULT_REQUIRE_PPE = ("boots", "hivis", "hardhat")

DEFAULT_HISTORY_LIMIT = 200
PPE_DELIMITER = ";"
EXPORT_FILENAME_PREFIX = "site-attendance_"
