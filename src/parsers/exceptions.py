class RetrievalError(Exception):
    """A remote data source could not be reached or answered with an error."""


class DexScreenerError(RetrievalError):
    pass


class HeliusError(RetrievalError):
    pass
