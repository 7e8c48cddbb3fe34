from string import Template as _Substitution

from .catalog import get_template
from .models import IntentCategory


def synthesize(category: IntentCategory, raw_prompt: str, **values: str) -> str:
    """Produce the response text for a classified prompt.

    The prompt only drives classification; it is never spliced into the
    response. Without ``values`` the template body is returned verbatim.

    Args:
        category: Classified intent category
        raw_prompt: The prompt as typed (unused for substitution)
        **values: Optional ``$placeholder`` values

    Returns:
        Response text
    """
    body = get_template(category).body
    if not values:
        return body
    return _Substitution(body).safe_substitute(values)
