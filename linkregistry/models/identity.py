from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Verified caller identity, as resolved by the external auth layer.

    The registry trusts this value unconditionally.

    Example:
        >>> caller = Identity(user_id='8b0c...', email='alice@example.com')
    """

    user_id: str
    email: str
