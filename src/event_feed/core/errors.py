class SourceError(Exception):
    """A document export could not be read or has an unexpected shape."""


class ConfigError(Exception):
    pass
