class ParamTreeError(Exception):
    """Base class for every error raised by param_tree."""


class ParameterTreeError(ParamTreeError, ValueError):
    """A parameter path contradicts the type of one of its ancestors (strict mode only)."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class ConfigError(ParamTreeError):
    pass


class InputFileError(ParamTreeError):
    pass
