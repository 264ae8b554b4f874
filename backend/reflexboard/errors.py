"""Error types shared by the services and the HTTP layer."""


class ReflexboardError(Exception):
    pass


class SubmissionRejected(ReflexboardError):
    """A score submission failed validation. No state was changed except
    that the token, once looked up, stays consumed."""

    reason = 'invalid_payload'
    status_code = 400

    def __init__(self, reason=None):
        if reason is not None:
            self.reason = reason
        super().__init__(self.reason)


class ValidationError(SubmissionRejected):
    reason = 'invalid_payload'
    status_code = 400


class AuthorizationError(SubmissionRejected):
    reason = 'invalid_or_expired_token'
    status_code = 401


class ChannelError(ReflexboardError):
    """The chat platform could not be reached or refused the request."""
