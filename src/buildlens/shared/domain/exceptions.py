"""
Domain exceptions for buildlens.

Resolution code rarely raises these: they travel as the `cause` of an Err
outcome so callers can tell a missing model from a broken transport.
All application errors inherit from BuildLensError.
"""


class BuildLensError(Exception):
    """Base class for all buildlens exceptions."""

    def __init__(self, message: str, context: dict = None):
        super().__init__(message)
        self.context = context or {}


class ConnectionFailure(BuildLensError):
    """Raised when the model service cannot be reached. Aborts the whole resolve."""

    pass


class ModelNotFound(BuildLensError):
    """The model service has no model of the requested kind for a module."""

    pass


class ModelFetchError(BuildLensError):
    """Transport or payload error while fetching a model."""

    def __init__(self, message: str, cause: BaseException = None, context: dict = None):
        super().__init__(message, context)
        self.cause = cause


class VariantResolutionFailure(BuildLensError):
    """No usable build variant could be determined."""

    pass


class ModuleResolutionFailure(BuildLensError):
    """Resolution of a single module failed; captured as a FailedModule."""

    def __init__(self, module_name: str, module_detail: str, cause: BaseException = None):
        super().__init__(f"{module_name}: {module_detail}", {"module": module_name})
        self.module_name = module_name
        self.module_detail = module_detail
        self.cause = cause


class GraphItemParseError(BuildLensError):
    """A graph-item record does not match the expected key grammar."""

    pass


class ConfigurationError(BuildLensError):
    """Raised when configuration or input files are invalid."""

    pass
