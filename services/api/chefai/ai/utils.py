import re
from typing import Optional

from ..settings import PLACEHOLDER_API_KEY

_MODEL_PREFIX = re.compile(r"^model\s*=\s*", re.IGNORECASE)


def normalize_model_id(model_string: str) -> str:
    """
    Model id as the SDK expects it, from a possibly quoted env value.

    'model="gemini-2.5-flash"' and '"gemini-2.5-flash"' both give 'gemini-2.5-flash'.
    """
    if not model_string:
        return model_string
    return _MODEL_PREFIX.sub("", model_string.strip()).strip("\"' ")


def usable_api_key(key: Optional[str]) -> Optional[str]:
    """Return the key if it can be used for a request, else None."""
    if not isinstance(key, str) or not key.strip():
        return None
    key = key.strip()
    return None if key == PLACEHOLDER_API_KEY else key
