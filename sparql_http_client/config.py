# SPDX-License-Identifier: MIT
#
#  █████╗ ██████╗  █████╗ ███████╗
# ██╔══██╗██╔══██╗██╔══██╗██╔════╝
# ███████║██████╔╝███████║███████╗
# ██╔══██║██╔══██╗██╔══██║╚════██║
# ██║  ██║██║  ██║██║  ██║███████║
# ╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
# Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>
#
# Licensed under the MIT License.
# See LICENSE and THIRD_PARTY_LICENSES for details.

"""Loads a YAML client configuration into typed dataclasses.

    endpoint: https://query.wikidata.org/sparql
    user_agent:
      name: my-app
      version: "1.0"
      contact: me@example.org
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from sparql_http_client.client import Endpoint, SparqlClient, UserAgent
from sparql_http_client.errors import ConfigError
from sparql_http_client.result import Fail, Ok, Result


@dataclass(frozen=True, slots=True)
class ClientConfig:
    endpoint: str
    user_agent: UserAgent

    def build_endpoint(self) -> Endpoint:
        return Endpoint(client=SparqlClient(user_agent=self.user_agent), url=self.endpoint)


def _build_user_agent(raw: dict[str, Any] | None) -> UserAgent:
    if raw is None:
        return UserAgent()
    return UserAgent(
        name=str(raw["name"]),
        version=str(raw["version"]),
        contact=str(raw.get("contact", "")),
    )


def load_config(path: Path) -> Result[ClientConfig, ConfigError]:
    """Load a client config file. No validation beyond structure."""
    if not path.exists():
        return Fail(error=ConfigError(f"Config file not found: {path}"))

    try:
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        return Fail(error=ConfigError(f"YAML parse error: {exc}"), context=str(path))

    try:
        config = ClientConfig(
            endpoint=str(raw["endpoint"]),
            user_agent=_build_user_agent(raw.get("user_agent")),
        )
    except (KeyError, TypeError, AttributeError) as exc:
        return Fail(error=ConfigError(f"Config structure error: {exc}"), context=str(path))

    return Ok(data=config)
