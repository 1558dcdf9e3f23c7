import logging
import random
import string
from typing import Any, Dict, Optional

from param_tree.parameters import ParameterDescriptor
from param_tree.paths import LIST_MARKER, SEPARATOR

logger = logging.getLogger(__name__)


def _is_below(path: str, ancestor: str) -> bool:
    return path.startswith(ancestor + SEPARATOR) or path.startswith(ancestor + LIST_MARKER)


def without_excluded(parameters: Dict[str, ParameterDescriptor]) -> Dict[str, ParameterDescriptor]:
    """
    Drops parameters flagged exclude_from_examples, together with every
    parameter nested below them. Order is preserved.
    """
    excluded = [path for path, p in parameters.items() if p.exclude_from_examples]
    if not excluded:
        return dict(parameters)

    kept = {}
    for path, parameter in parameters.items():
        if path in excluded or any(_is_below(path, e) for e in excluded):
            logger.debug("Excluding %r from examples", path)
            continue
        kept[path] = parameter
    return kept


class ExampleGenerator:
    """
    Fills in example values for parameters that were declared without one.

    With a seed every call to fill() starts from the same random state, so the
    same parameters always get the same examples.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def fill(self, parameters: Dict[str, ParameterDescriptor]) -> Dict[str, ParameterDescriptor]:
        if self.seed is not None:
            self._random.seed(self.seed)

        filled = {}
        for path, parameter in parameters.items():
            if parameter.example is None:
                parameter = parameter.model_copy(update={"example": self.example_for(parameter)})
            filled[path] = parameter
        return filled

    def example_for(self, parameter: ParameterDescriptor) -> Any:
        if parameter.type == "object":
            return {}
        if parameter.type == "object[]":
            return [{}]

        if parameter.enum:
            value = self._random.choice(parameter.enum)
        else:
            value = self._value_of_type(parameter.base_type)

        return [value] if parameter.is_array else value

    def _value_of_type(self, base_type: str) -> Any:
        if base_type == "integer":
            return self._random.randint(1, 100)
        if base_type == "number":
            return round(self._random.uniform(0, 1000), 2)
        if base_type == "boolean":
            return self._random.choice([True, False])
        if base_type == "file":
            return f"{self._word()}.txt"
        return self._word()

    def _word(self) -> str:
        length = self._random.randint(5, 10)
        return "".join(self._random.choice(string.ascii_lowercase) for _ in range(length))
