"""Introspection document loading and caching."""

import json
import logging
from dataclasses import asdict, dataclass
from typing import Optional

import requests

from . import utils
from .config import Config
from .parser import introspection_from_sdl

logger = logging.getLogger(__name__)

SDL_SUFFIXES = (".graphql", ".gql")

INTROSPECTION_QUERY = """
query SchemaIntrospection {
  __schema {
    queryType { name }
    types {
      kind
      name
      description
      fields {
        name
        description
        type {
          ...TypeRef
        }
        isDeprecated
        deprecationReason
      }
      interfaces {
        kind
        name
      }
      possibleTypes {
        kind
        name
      }
    }
  }
}

fragment TypeRef on __Type {
  kind
  name
  ofType {
    kind
    name
    ofType {
      kind
      name
      ofType {
        kind
        name
        ofType {
          kind
          name
          ofType {
            kind
            name
            ofType {
              kind
              name
              ofType {
                kind
                name
              }
            }
          }
        }
      }
    }
  }
}
"""


class SchemaFetchError(RuntimeError):
    """Introspection request failed or returned an unusable response."""


@dataclass
class SchemaProfile:
    """Introspection document with metadata."""

    url: str
    fetched_at: str
    hash: str
    document: dict


def load_schema(
    url: Optional[str] = None,
    schema_file: Optional[str] = None,
    cfg: Optional[Config] = None,
    allow_cache: bool = True,
    refresh: bool = False,
    token: Optional[str] = None,
) -> SchemaProfile:
    """
    Load an introspection document from file or via introspection.

    Args:
        url: GraphQL endpoint URL
        schema_file: Path to introspection JSON or SDL (.graphql/.gql) file
        cfg: Configuration object
        allow_cache: Whether to use cached schema
        refresh: Force refresh even if cached
        token: Optional API token for authentication

    Returns:
        SchemaProfile with loaded document

    Raises:
        ValueError: If neither url nor schema_file provided
        SchemaFetchError: If introspection fails
    """
    cfg = cfg or Config()

    # Load from file
    if schema_file:
        if utils.suffix(schema_file) in SDL_SUFFIXES:
            doc = introspection_from_sdl(utils.read_text(schema_file))
        else:
            doc = utils.read_json(schema_file)
        return SchemaProfile(
            url=f"file://{schema_file}",
            fetched_at=utils.now_iso(),
            hash=utils.sha256(doc),
            document=doc,
        )

    # Load from URL
    if not url:
        raise ValueError("No URL or schema file provided")

    cache_path = cache_path_for(url, cfg)

    # Try cache first
    if allow_cache and utils.exists(cache_path) and not refresh:
        logger.debug("Using cached schema %s", cache_path)
        return SchemaProfile(**utils.read_json(cache_path))

    # Fetch from server
    doc = introspect(url, token or cfg.token, timeout=cfg.timeout)
    prof = SchemaProfile(
        url=url,
        fetched_at=utils.now_iso(),
        hash=utils.sha256(doc),
        document=doc,
    )

    # Save to cache
    utils.ensure_dir(utils.dirname(cache_path))
    utils.write_json(cache_path, asdict(prof))

    return prof


def introspect(graphql_url: str, token: Optional[str] = None, timeout: int = 30) -> dict:
    """
    Introspect GraphQL schema via HTTP.

    Args:
        graphql_url: GraphQL endpoint URL
        token: Optional API token for authentication
        timeout: Request timeout in seconds

    Returns:
        Introspection document ({"data": {"__schema": ...}})

    Raises:
        SchemaFetchError: If introspection fails
    """
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Token {token}"

    logger.info("Sending introspection query to %s", graphql_url)
    resp = requests.post(graphql_url, json={"query": INTROSPECTION_QUERY}, headers=headers, timeout=timeout)

    if not resp.ok:
        raise SchemaFetchError(f"Failed to fetch schema: {resp.status_code} {resp.reason}")

    payload = safe_json_response(resp, context="GraphQL introspection")

    if payload.get("errors"):
        raise SchemaFetchError(f"GraphQL errors: {json.dumps(payload['errors'])}")

    schema = (payload.get("data") or {}).get("__schema") or {}
    logger.info(
        "Received introspection response: %d types, query type %s",
        len(schema.get("types") or []),
        "present" if schema.get("queryType") else "missing",
    )

    return payload


def safe_json_response(response, context: str = "API request") -> dict:
    """
    Safely parse JSON from HTTP response with helpful error messages.

    Raises:
        SchemaFetchError: If response is not valid JSON
    """
    try:
        return response.json()
    except ValueError as e:
        body_preview = response.text[:300]
        if len(response.text) > 300:
            body_preview += "..."

        error_parts = [
            f"{context} failed - server returned non-JSON response",
            "",
            f"  URL: {response.url}",
            f"  Status: {response.status_code}",
            f"  Content-Type: {response.headers.get('Content-Type', 'unknown')}",
            "",
            "  Response preview:",
            f"  {body_preview}",
            "",
            "  Suggestions:",
            "  - Verify the URL is correct and points to the GraphQL endpoint",
            "  - Authentication may be required - try adding --token YOUR_TOKEN",
            "",
            f"  Original JSON error: {e}",
        ]
        raise SchemaFetchError("\n".join(error_parts)) from e


def cache_path_for(url: str, cfg: Config) -> str:
    """
    Get cache path for a schema URL.

    Args:
        url: GraphQL endpoint URL
        cfg: Configuration object

    Returns:
        Path to cache file
    """
    host = utils.sanitize_host(url)
    return utils.join(cfg.schema_cache_dir, f"{host}.json")
