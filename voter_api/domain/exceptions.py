class VoterStoreError(ValueError):
    """Base class for failures reported by the voter store."""


class AlreadyExistsError(VoterStoreError):
    pass


class NotFoundError(VoterStoreError):
    pass
