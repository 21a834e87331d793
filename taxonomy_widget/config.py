import logging
import os
from dotenv import load_dotenv

load_dotenv()


def _get_float_env(name, default=None):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_int_env(name, default=None):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool_env(name, default=False):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes")

DATA_DIR = os.getenv("DATA_DIR", "./data")
TAXONOMY_FILE = os.getenv("TAXONOMY_FILE", os.path.join(DATA_DIR, "taxonomies", "sample.json"))
LABEL_FIELD = os.getenv("LABEL_FIELD", "label")
CHILDREN_FIELD = os.getenv("CHILDREN_FIELD", "children")

DEFAULT_PATH_SEPARATOR = os.getenv("DEFAULT_PATH_SEPARATOR", " / ")
DEFAULT_PLACEHOLDER = os.getenv("DEFAULT_PLACEHOLDER", "Click to add...")

SEARCH_MODE = os.getenv("SEARCH_MODE", "substring").lower()
FUZZY_THRESHOLD = _get_float_env("FUZZY_THRESHOLD", 80.0)

DEBUG = _get_bool_env("DEBUG")
LOG_LEVEL = "DEBUG" if DEBUG else os.getenv("LOG_LEVEL", "WARNING").upper()
PORT = _get_int_env("PORT", 8000)


def configure_logging(level=None):
    """Install a root handler once; later calls only adjust the level."""
    level = (level or LOG_LEVEL).upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format="[%(levelname)s] %(name)s: %(message)s")
    root.setLevel(getattr(logging, level, logging.WARNING))
