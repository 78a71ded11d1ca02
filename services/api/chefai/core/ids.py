import time
import uuid


def new_id() -> str:
    """Opaque unique id: millisecond timestamp followed by a random suffix."""
    return f"{int(time.time() * 1000)}{uuid.uuid4().hex[:9]}"
