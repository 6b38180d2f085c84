"""Configuration management for gql-graph."""

import os
from dataclasses import dataclass
from typing import Optional

import yaml

from . import utils

URL_ENV = "GQL_GRAPH_URL"
TOKEN_ENV = "GQL_GRAPH_TOKEN"


@dataclass
class Config:
    """Configuration for gql-graph."""

    default_url: Optional[str] = None
    token: Optional[str] = None
    graphql_path: str = "/api/graphql/"
    schema_cache_dir: str = "~/.gql-graph/schemas"
    timeout: int = 30
    layout: str = "grid"
    hide_builtins: bool = False
    hide_relay: bool = False

    def __post_init__(self):
        """Expand paths after initialization."""
        self.schema_cache_dir = utils.expand_path(self.schema_cache_dir)


def get_default_config_path() -> str:
    """Get default config file path."""
    return utils.expand_path("~/.gql-graph/config.yaml")


def load(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file, then apply environment overrides.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with defaults for missing values.
    """
    if config_path is None:
        config_path = get_default_config_path()

    data = {}
    if utils.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

    return Config(
        default_url=os.environ.get(URL_ENV) or data.get("default_url"),
        token=os.environ.get(TOKEN_ENV) or data.get("token"),
        graphql_path=data.get("graphql_path", "/api/graphql/"),
        schema_cache_dir=data.get("schema_cache_dir", "~/.gql-graph/schemas"),
        timeout=data.get("timeout", 30),
        layout=data.get("layout", "grid"),
        hide_builtins=data.get("hide_builtins", False),
        hide_relay=data.get("hide_relay", False),
    )


def create_example_config(path: Optional[str] = None) -> None:
    """Create an example config file."""
    if path is None:
        path = get_default_config_path()

    utils.ensure_dir(utils.dirname(path))

    example = {
        "default_url": "https://nautobot.local/",
        "graphql_path": "/api/graphql/",
        "schema_cache_dir": "~/.gql-graph/schemas",
        "timeout": 30,
        "layout": "hierarchical",
        "hide_builtins": True,
        "hide_relay": False,
    }

    with open(path, "w") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)
