"""
Domain Exceptions

Raised by repository adapters when a database uniqueness guard rejects a
write that the use case's own checks let through (a concurrent request won
the race). Use cases roll back and translate them into Result errors.
"""


class ActiveConnectionExists(Exception):
    """Insert would create a second ACTIVE connection for a DOM or SUB"""


class ActiveStageExists(Exception):
    """Update would leave two stages with is_sub_active set"""

class StageNumberExists(Exception):
    """Insert or update would give two stages the same stage_number"""
