"""
Notification helpers
"""


def to_client_name(name: str, *names: str) -> str:
    """
    Join client tags into a client_name value.

    Example:
        >>> to_client_name("default", "test2")
        'default,test2'
    """
    if not names:
        return name
    return ",".join((name,) + names)
