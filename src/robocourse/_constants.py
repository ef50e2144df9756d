"""Internal constants shared across the library."""

DEFAULT_BASE_URL = "http://localhost:8000"
USER_AGENT = "robocourse"

DEFAULT_YEARS: tuple[str, ...] = ("2023", "2024", "2025", "Test")
DEFAULT_CURRENT_YEAR = "2023"

# ------------------------------------------------------------------
# Per-year documents
# ------------------------------------------------------------------

#: Every document a YearConfig carries, in load order.
DOCUMENT_NAMES: tuple[str, ...] = ("robot", "course", "sensors", "rules")

#: Documents fetched by default.  ``sensors`` and ``rules`` are declared
#: but not published for any year yet.
ACTIVE_DOCUMENTS: tuple[str, ...] = ("robot", "course")

YEAR_DIR_TEMPLATE = "config/years/{year}/"
YAML_SUFFIXES: tuple[str, ...] = (".yaml", ".yml")


def document_path(year: str, name: str) -> str:
    """Relative path of a per-year document, e.g. ``config/years/2023/robot.yaml``."""
    return f"{YEAR_DIR_TEMPLATE.format(year=year)}{name}.yaml"


def year_asset_prefix(year: str) -> str:
    """Site-absolute directory of a year's assets, e.g. ``/config/years/2023/``."""
    return "/" + YEAR_DIR_TEMPLATE.format(year=year)

# ------------------------------------------------------------------
# Deploy defaults
# ------------------------------------------------------------------

DEPLOY_COMMIT_MESSAGE = "Update build files"
DEPLOY_REMOTE = "origin"
DEPLOY_BRANCH = "main"
DEPLOY_SITE_URL = "https://robocourse.github.io/"
