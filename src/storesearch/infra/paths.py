from importlib.resources import files

from platformdirs import user_config_path

PACKAGE_NAME = "storesearch"  # Python package name

# -----------------------------------------------------------------------------
# User-writable directories & files
# -----------------------------------------------------------------------------

# Base config directory (e.g. ~/.config/storesearch/)
USER_CONFIG_DIR = user_config_path(PACKAGE_NAME, appauthor=False)

SETTING_PATH = USER_CONFIG_DIR / "settings.toml"

# -----------------------------------------------------------------------------
# Embedded resources
# -----------------------------------------------------------------------------

RES = files("storesearch.resources")

DEFAULT_CONFIG_FILE = RES.joinpath("config", "settings.sample.toml")
