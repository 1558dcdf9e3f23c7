from param_tree.cleaner import ParameterTree, clean, clean_parameters
from param_tree.errors import ConfigError, InputFileError, ParameterTreeError, ParamTreeError
from param_tree.examples import ExampleGenerator, without_excluded
from param_tree.parameters import ParameterDescriptor, ParameterKind, parameters_from_mapping

__version__ = "0.1.0"

__all__ = [
    "ParameterTree",
    "clean",
    "clean_parameters",
    "ConfigError",
    "InputFileError",
    "ParameterTreeError",
    "ParamTreeError",
    "ExampleGenerator",
    "without_excluded",
    "ParameterDescriptor",
    "ParameterKind",
    "parameters_from_mapping",
]
