"""
API Contract Parser for Swagger Search

This module turns a parsed OpenAPI/Swagger specification into the flat list of
searchable documents that feeds the TF-IDF index. It also loads specification
files from disk for offline indexing.

Key Features:
- OpenAPI 3 (components.schemas) and Swagger 2 (definitions) support
- One document per endpoint and one per schema
- Deterministic document ids and emission order
- Tolerant of malformed or partial specifications

Document Content:
1. Endpoint documents join, with " | " and skipping blanks:
   - "{METHOD} {path}"
   - summary and description
   - space-joined tags
   - "operationId: {operationId}"
   - "Parameters: {json}" and "Responses: {codes}" when present

2. Schema documents join:
   - "Schema: {name}"
   - description
   - "Type: {type}" (object when unset)
   - "Properties: {names}" when present

Example Usage:
    from swagger_search.indexing.parser import extract_documents

    documents = extract_documents(spec, "payments-service")
    for doc in documents:
        print(doc.id, doc.metadata.type)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple, Union

import yaml

from ..search.search_models import (
    DocumentMetadata,
    DocumentType,
    IndexedDocument,
    endpoint_document_id,
    schema_document_id,
)

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options", "head")

PART_SEPARATOR = " | "


def is_http_method(method: str) -> bool:
    """Check whether a path item key names an HTTP operation."""
    return isinstance(method, str) and method.lower() in HTTP_METHODS


def iter_operations(spec: Dict[str, Any]) -> Iterator[Tuple[str, str, Dict[str, Any]]]:
    """Iterate over (path, method, operation) triples of a specification.

    Methods are yielded as spelled in the source mapping. Non-mapping path
    items and operations are skipped.
    """
    paths = spec.get("paths") if isinstance(spec, dict) else None
    if not isinstance(paths, dict):
        return

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            logger.warning(f"Invalid path data for {path}")
            continue
        for method, operation in path_item.items():
            if not is_http_method(method) or not isinstance(operation, dict):
                continue
            yield path, method, operation


def get_schema_definitions(spec: Dict[str, Any]) -> Dict[str, Any]:
    """Return the schema container: components.schemas, else definitions."""
    if not isinstance(spec, dict):
        return {}

    components = spec.get("components")
    if isinstance(components, dict):
        schemas = components.get("schemas")
        if isinstance(schemas, dict):
            return schemas

    definitions = spec.get("definitions")
    if isinstance(definitions, dict):
        return definitions
    return {}


def _join_parts(parts: List[str]) -> str:
    return PART_SEPARATOR.join(part for part in parts if part)


def build_endpoint_content(path: str, method: str, operation: Dict[str, Any]) -> str:
    """Flatten an operation into searchable text."""
    tags = operation.get("tags") or []
    parts = [
        f"{method.upper()} {path}",
        str(operation.get("summary") or ""),
        str(operation.get("description") or ""),
        " ".join(str(tag) for tag in tags) if isinstance(tags, list) else "",
        f"operationId: {operation.get('operationId') or ''}",
    ]

    # Empty containers still count as present
    parameters = operation.get("parameters")
    if isinstance(parameters, (list, dict)) or parameters:
        parts.append(
            "Parameters: "
            + json.dumps(
                parameters, separators=(",", ":"), ensure_ascii=False, default=str
            )
        )

    responses = operation.get("responses")
    if isinstance(responses, dict):
        parts.append("Responses: " + ", ".join(str(code) for code in responses))

    return _join_parts(parts)


def build_schema_content(name: str, schema: Any) -> str:
    """Flatten a schema definition into searchable text."""
    if not isinstance(schema, dict):
        schema = {}

    parts = [
        f"Schema: {name}",
        str(schema.get("description") or ""),
        f"Type: {schema.get('type') or 'object'}",
    ]

    properties = schema.get("properties")
    if isinstance(properties, dict):
        parts.append("Properties: " + ", ".join(str(prop) for prop in properties))

    return _join_parts(parts)


def extract_documents(spec: Dict[str, Any], service: str) -> List[IndexedDocument]:
    """Extract searchable documents from an API specification.

    Args:
        spec: Parsed OpenAPI 3 or Swagger 2 document
        service: Service identifier the documents belong to

    Returns:
        Endpoint documents in path/method order, followed by schema documents
    """
    documents: List[IndexedDocument] = []

    for path, method, operation in iter_operations(spec):
        operation_id = operation.get("operationId")
        documents.append(
            IndexedDocument(
                id=endpoint_document_id(service, method, path),
                content=build_endpoint_content(path, method, operation),
                metadata=DocumentMetadata(
                    service=service,
                    type=DocumentType.ENDPOINT,
                    path=path,
                    method=method.upper(),
                    operation_id=str(operation_id) if operation_id else None,
                ),
            )
        )

    for name, schema in get_schema_definitions(spec).items():
        documents.append(
            IndexedDocument(
                id=schema_document_id(service, name),
                content=build_schema_content(name, schema),
                metadata=DocumentMetadata(service=service, type=DocumentType.SCHEMA),
            )
        )

    logger.debug(f"Extracted {len(documents)} documents from {service}")
    return documents


def load_specification(file_path: Union[str, Path]) -> Dict[str, Any]:
    """Load an API specification file.

    Args:
        file_path: Path to a JSON or YAML specification

    Returns:
        Parsed specification

    Raises:
        ValueError: If the file type is unsupported or the content is not a mapping
    """
    file_path = Path(file_path)
    logger.info(f"Loading specification: {file_path}")

    with open(file_path, encoding="utf-8") as f:
        if file_path.suffix in [".yaml", ".yml"]:
            spec_data = yaml.safe_load(f)
        elif file_path.suffix == ".json":
            spec_data = json.load(f)
        else:
            raise ValueError(f"Unsupported file type: {file_path.suffix}")

    if not isinstance(spec_data, dict):
        raise ValueError(f"Specification {file_path} is not a mapping")
    return spec_data
