from typing import Any, Dict, List, Optional

from param_tree.cleaner import ParameterTree, clean_parameters
from param_tree.examples import ExampleGenerator
from param_tree.parameters import ParameterDescriptor, ParameterKind, RawParameters, parameters_from_mapping

OPENAPI_VERSION = "3.0.3"

PRIMITIVE_SCHEMAS = {
    "string": {"type": "string"},
    "integer": {"type": "integer"},
    "number": {"type": "number"},
    "boolean": {"type": "boolean"},
    "file": {"type": "string", "format": "binary"},
    "object": {"type": "object"},
}


def _object_schema(tree: ParameterTree, container: str) -> Dict[str, Any]:
    properties = {}
    required = []

    for name, path, descriptor in tree.fields(container):
        properties[name] = _parameter_schema(tree, path, descriptor)
        if descriptor.required:
            required.append(name)

    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _parameter_schema(tree: ParameterTree, path: str, descriptor: ParameterDescriptor) -> Dict[str, Any]:
    if descriptor.kind is ParameterKind.OBJECT:
        schema = _object_schema(tree, tree.child_container(path))
    elif descriptor.kind is ParameterKind.OBJECT_LIST:
        schema = {"type": "array", "items": _object_schema(tree, tree.child_container(path))}
    elif descriptor.is_array:
        items = dict(PRIMITIVE_SCHEMAS[descriptor.base_type])
        if descriptor.enum:
            items["enum"] = list(descriptor.enum)
        schema = {"type": "array", "items": items}
    else:
        schema = dict(PRIMITIVE_SCHEMAS[descriptor.type])
        if descriptor.enum:
            schema["enum"] = list(descriptor.enum)

    if descriptor.description:
        schema["description"] = descriptor.description
    return schema


def parameters_to_schema(parameters: RawParameters, strict: bool = False) -> Dict[str, Any]:
    """JSON schema describing the payload a parameter tree produces."""
    tree = ParameterTree(parameters_from_mapping(parameters), strict=strict)
    return _object_schema(tree, "")


def build_request_body(
    parameters: RawParameters,
    generator: Optional[ExampleGenerator] = None
) -> Optional[Dict[str, Any]]:
    descriptors = parameters_from_mapping(parameters)
    if not descriptors:
        return None

    has_files = any(p.base_type == "file" for p in descriptors.values())
    content_type = "multipart/form-data" if has_files else "application/json"

    return {
        "required": any(p.required for p in descriptors.values()),
        "content": {
            content_type: {
                "schema": parameters_to_schema(descriptors),
                "example": clean_parameters(descriptors, generator),
            }
        },
    }


def build_query_parameters(
    parameters: RawParameters,
    generator: Optional[ExampleGenerator] = None
) -> List[Dict[str, Any]]:
    descriptors = parameters_from_mapping(parameters)
    tree = ParameterTree(descriptors)
    examples = clean_parameters(descriptors, generator)

    query_parameters = []
    for name, path, descriptor in tree.fields(""):
        parameter: Dict[str, Any] = {
            "in": "query",
            "name": name,
            "required": descriptor.required,
            "schema": _parameter_schema(tree, path, descriptor),
        }
        if descriptor.description:
            parameter["description"] = descriptor.description
        if descriptor.kind is not ParameterKind.SCALAR:
            parameter["style"] = "deepObject"
            parameter["explode"] = True
        if name in examples:
            parameter["example"] = examples[name]
        query_parameters.append(parameter)

    return query_parameters


def build_openapi_spec(
    routes: List[Dict[str, Any]],
    title: str = "Generated API",
    version: str = "1.0.0",
    generator: Optional[ExampleGenerator] = None
) -> Dict[str, Any]:
    paths: Dict[str, Dict[str, Any]] = {}

    for route in routes:
        path = route["path"]
        method = route.get("method", "GET").lower()

        operation: Dict[str, Any] = {
            "summary": route.get("summary", ""),
            "responses": {
                "200": {
                    "description": "Success"
                }
            }
        }
        if route.get("description"):
            operation["description"] = route["description"]

        query_parameters = build_query_parameters(route.get("query_parameters") or {}, generator)
        if query_parameters:
            operation["parameters"] = query_parameters

        request_body = build_request_body(route.get("body_parameters") or {}, generator)
        if request_body:
            operation["requestBody"] = request_body

        paths.setdefault(path, {})[method] = operation

    spec = {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": title,
            "version": version
        },
        "paths": paths
    }

    return spec
