"""Template catalog.

Response templates are text assets shipped in ``retail_assistant/templates``.
Templates can be overridden by placing files in the working directory.
Each template is loaded once and cached for the life of the process.
"""

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from .models import IntentCategory, Template

# Default templates directory (package location)
_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

GREETING_NAME = "greeting"


@lru_cache(maxsize=16)
def load_template_text(name: str) -> str:
    """Load a template body from file.

    Search order:
    1. Current working directory: ./templates/{name}.txt
    2. Package templates directory: retail_assistant/templates/{name}.txt

    Args:
        name: Template name (without .txt extension)

    Returns:
        Template text with the trailing newline removed

    Raises:
        FileNotFoundError: If template file not found in any location
    """
    filename = f"{name}.txt"

    local_path = Path.cwd() / "templates" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8").rstrip("\n")

    package_path = _TEMPLATES_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8").rstrip("\n")

    raise FileNotFoundError(
        f"Template '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


@lru_cache(maxsize=None)
def get_template(category: IntentCategory) -> Template:
    """Get the response template for an intent category."""
    category = IntentCategory(category)
    return Template(category=category, body=load_template_text(category.value))


def get_template_catalog() -> Mapping[IntentCategory, Template]:
    """Get a read-only mapping of every category to its template."""
    return MappingProxyType({category: get_template(category) for category in IntentCategory})


def get_greeting() -> str:
    """Get the assistant greeting that seeds every new session."""
    return load_template_text(GREETING_NAME)


def clear_cache() -> None:
    """Clear the template cache (useful after modifying template files)."""
    get_template.cache_clear()
    load_template_text.cache_clear()
