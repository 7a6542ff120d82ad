class ContractViolation(RuntimeError):
    """A caller used the game controller out of order.

    This is a bug in the caller (UI/driver), not a game condition, and is
    never caught or retried inside the engine.
    """
