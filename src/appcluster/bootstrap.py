"""
Instance bootstrap script rendering.

Scripts are jinja2 templates rendered with StrictUndefined so a missing
variable fails composition instead of producing a broken instance.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateError

from .errors import BootstrapRenderError

ECS_BOOTSTRAP_TEMPLATE = """#!/bin/bash
echo ECS_CLUSTER={{ cluster_name }} >> /etc/ecs/ecs.config
"""

_env = Environment(
    loader=BaseLoader(),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def render_bootstrap(template: str, variables: Mapping[str, Any]) -> str:
    """
    Render a bootstrap script template.

    Args:
        template: jinja2 template source
        variables: Variable name -> value

    Returns:
        Rendered script

    Raises:
        BootstrapRenderError: If rendering fails
    """
    try:
        return _env.from_string(template).render(**variables)
    except TemplateError as e:
        raise BootstrapRenderError(f"Bootstrap script rendering failed: {e}") from e


def ecs_bootstrap_script(cluster_name: str) -> str:
    """Render the script that registers an instance into an ECS cluster."""
    return render_bootstrap(ECS_BOOTSTRAP_TEMPLATE, {"cluster_name": cluster_name})
