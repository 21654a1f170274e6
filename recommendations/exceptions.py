class EngagementError(Exception):
    """Domain rule violated by a co-sign or tip; reported to the client as 400"""

    message = "Engagement rejected"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class SelfCoSignError(EngagementError):
    message = "Cannot co-sign your own track"


class AlreadyCoSignedError(EngagementError):
    message = "Already co-signed"


class SelfTipError(EngagementError):
    message = "Cannot tip your own track"
