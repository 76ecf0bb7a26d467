class OrderWriteError(RuntimeError):
    """A multi-step order write failed and was rolled back.

    ``step`` names the sub-step that raised (logged, never shown to the
    caller), ``action`` is the user-facing verb: create, update or delete.
    """

    def __init__(self, action: str, step: str):
        self.action = action
        self.step = step
        super().__init__(f"Failed to {action} order")
