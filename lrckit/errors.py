class LrckitError(RuntimeError):
    pass


class ConfigError(LrckitError):
    pass


class ExportError(LrckitError):
    pass
