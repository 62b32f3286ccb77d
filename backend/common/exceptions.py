class UserFriendlyDataException(Exception):
    """
    A business rule was violated. The message is safe to show to the user as-is.
    """


class OptimisticLockError(Exception):
    """
    The row was changed by someone else since it was loaded.
    """
    def __init__(self, instance):
        self.instance = instance
        super().__init__(
            f"{instance.__class__.__name__} {instance.pk} was modified concurrently "
            f"(expected version {instance.version})"
        )


CONCURRENT_UPDATE_MESSAGE = "Somebody else might have updated the data. Please refresh and try again."
