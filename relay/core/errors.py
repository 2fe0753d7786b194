class ProviderError(RuntimeError):
    """Raised when the completion provider cannot produce a reply.

    Messages are meant for server logs. They must never carry the credential.
    """


class ProviderNotConfigured(ProviderError):
    pass
