from __future__ import annotations

import uuid


def new_id() -> str:
    """Random UUID4 string.

    uuid4 draws from os.urandom, so kiosks need no coordination to avoid collisions.
    """
    return str(uuid.uuid4())
