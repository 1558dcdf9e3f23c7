from dataclasses import dataclass, field
from typing import Any, Dict, List

from jsonschema import Draft7Validator

from param_tree.cleaner import clean
from param_tree.examples import without_excluded
from param_tree.openapi_builder import parameters_to_schema
from param_tree.parameters import RawParameters, parameters_from_mapping

# validate() default: check the payload clean() builds from the parameters
CLEANED = object()


# =========================
# Models
# =========================

@dataclass
class SchemaViolation:
    path: str
    message: str
    expected: str
    actual: str
    severity: str = "error"

    def to_dict(self) -> Dict[str, str]:
        return {
            "path": self.path,
            "message": self.message,
            "expected": self.expected,
            "actual": self.actual,
            "severity": self.severity
        }


@dataclass
class ValidationResult:
    is_valid: bool
    violations: List[SchemaViolation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "violation_count": len(self.violations),
            "violations": [v.to_dict() for v in self.violations]
        }


# =========================
# Validator
# =========================

class ExampleValidator:
    """
    Checks that example payloads match the types their parameters declare,
    e.g. an integer[] parameter whose example is ["a"].
    """

    def __init__(self, parameters: RawParameters):
        self.parameters = without_excluded(parameters_from_mapping(parameters))
        self.schema = parameters_to_schema(self.parameters)

    def _get_violation(self, error) -> SchemaViolation:
        path = ".".join(str(p) for p in error.absolute_path) or "(root)"
        schema_node = error.schema if isinstance(error.schema, dict) else {}
        instance = error.instance

        if error.validator == "required":
            return SchemaViolation(
                path=path,
                message=error.message,
                expected="required field present",
                actual="missing"
            )

        if error.validator == "enum":
            return SchemaViolation(
                path=path,
                message=error.message,
                expected=f"one of {schema_node.get('enum')}",
                actual=str(instance)
            )

        if error.validator == "type":
            return SchemaViolation(
                path=path,
                message=error.message,
                expected=str(schema_node.get("type")),
                actual=f"{instance!r} (type: {type(instance).__name__})"
            )

        return SchemaViolation(
            path=path,
            message=error.message,
            expected=str(schema_node)[:50],
            actual=str(instance)
        )

    def validate(self, example: Any = CLEANED) -> ValidationResult:
        if example is CLEANED:
            example = clean(self.parameters)

        validator = Draft7Validator(self.schema)
        violations = [
            self._get_violation(error)
            for error in sorted(validator.iter_errors(example), key=lambda e: [str(p) for p in e.absolute_path])
        ]

        return ValidationResult(is_valid=not violations, violations=violations)


# =========================
# Report Formatter
# =========================

def format_violations_for_report(violations: List[SchemaViolation]) -> str:
    if not violations:
        return "Examples match their declared types"

    lines = [f"{len(violations)} example violation(s)"]

    for v in violations[:5]:
        lines.append(f"  - {v.path}: {v.message} (expected: {v.expected}, got: {v.actual})")

    if len(violations) > 5:
        lines.append(f"  ...and {len(violations) - 5} more")

    return "\n".join(lines)
