"""Shared test fixtures."""

import copy
from typing import Any, Dict

import httpx
import pytest

from swagger_search.indexing.indexer import SemanticIndex
from swagger_search.services.fetcher import SwaggerFetcher
from swagger_search.services.registry import ServiceRegistry, SwaggerService

# OpenAPI 3 document
PETSTORE_SPEC: Dict[str, Any] = {
    "openapi": "3.0.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "servers": [{"url": "https://petstore.example.com/v1"}],
    "paths": {
        "/pets": {
            "get": {
                "summary": "List all pets",
                "description": "Returns every pet in the store",
                "operationId": "listPets",
                "tags": ["pets"],
                "parameters": [
                    {"name": "limit", "in": "query", "required": False}
                ],
                "responses": {"200": {"description": "A list of pets"}},
            },
            "post": {
                "summary": "Create a pet",
                "operationId": "createPet",
                "tags": ["pets"],
                "responses": {"201": {"description": "Created"}},
            },
            "parameters": [{"name": "tenant", "in": "header"}],
        },
        "/pets/{petId}": {
            "get": {
                "summary": "Info for a specific pet",
                "operationId": "showPetById",
                "tags": ["pets"],
                "responses": {"200": {}, "404": {}},
            }
        },
        "/store/inventory": {
            "get": {
                "summary": "Returns pet inventories by status",
                "operationId": "getInventory",
                "tags": ["store"],
            }
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "description": "A pet for sale",
                "properties": {"id": {}, "name": {}, "tag": {}},
            },
            "Error": {
                "properties": {"code": {}, "message": {}},
            },
        }
    },
}

# Swagger 2 document
USERS_SPEC: Dict[str, Any] = {
    "swagger": "2.0",
    "host": "users.example.com",
    "basePath": "/api",
    "schemes": ["https"],
    "paths": {
        "/users": {
            "get": {
                "summary": "List users",
                "description": "Paginated list of registered users",
                "operationId": "listUsers",
                "tags": ["users"],
            },
            "POST": {
                "summary": "Register a new user account",
                "operationId": "createUser",
                "tags": ["users"],
            },
        },
        "/users/{id}": {
            "delete": {
                "summary": "Delete a user",
                "operationId": "deleteUser",
            }
        },
    },
    "definitions": {
        "User": {
            "type": "object",
            "description": "Registered account",
            "properties": {"username": {}, "email": {}},
        }
    },
}


@pytest.fixture
def petstore_spec() -> Dict[str, Any]:
    return copy.deepcopy(PETSTORE_SPEC)


@pytest.fixture
def users_spec() -> Dict[str, Any]:
    return copy.deepcopy(USERS_SPEC)


@pytest.fixture
def semantic_index(petstore_spec, users_spec) -> SemanticIndex:
    """Index holding the petstore and users services."""
    index = SemanticIndex()
    index.index_batch(petstore_spec, "petstore")
    index.index_batch(users_spec, "users")
    return index


@pytest.fixture
def registry() -> ServiceRegistry:
    """Petstore and users services, plus one that always fails."""
    return ServiceRegistry(
        SwaggerService(
            name=slug.title(),
            slug=slug,
            base_url=f"https://{slug}.example.com",
            openapi_path="/openapi.json",
            group=group,
        )
        for slug, group in [("petstore", "Pets"), ("users", "Identity"), ("broken", "Pets")]
    )


@pytest.fixture
def fetcher(registry, petstore_spec, users_spec) -> SwaggerFetcher:
    """Fetcher served by an in-process transport."""
    documents = {"petstore": petstore_spec, "users": users_spec}

    def handler(request: httpx.Request) -> httpx.Response:
        slug = request.url.host.split(".")[0]
        if slug in documents:
            return httpx.Response(200, json=documents[slug])
        return httpx.Response(404)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SwaggerFetcher(registry, client=client)
