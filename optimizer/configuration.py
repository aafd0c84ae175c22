"""Optimizer configuration filter for hero image preloading.

Transformers are listed by dotted import path, in execution order, under
the ``transformers`` key of the optimizer configuration.
"""

import logging
from collections.abc import Mapping
from typing import Any

from env_config import get_disable_force_preload_hero_image

logger = logging.getLogger(__name__)

KEY_TRANSFORMERS = "transformers"

FORCE_PRELOAD_HERO_IMAGE = (
    "optimizer.transformers.force_preload_hero_image.ForcePreloadHeroImage"
)

# Final head reordering stage of the host optimizer
REORDER_HEAD = "ReorderHead"

# Request query variable that switches the transformer off
DISABLE_QUERY_VAR = "amp_disable_force_preload_hero_image"


def is_reorder_head(entry: str) -> bool:
    """Check if a transformer entry refers to the ReorderHead stage.

    Args:
        entry: Transformer name or dotted import path.

    Returns:
        True for ``ReorderHead`` or any path ending in ``.ReorderHead``.
    """
    return entry == REORDER_HEAD or entry.endswith(f".{REORDER_HEAD}")


def filter_optimizer_config(configuration: Mapping[str, Any]) -> dict[str, Any]:
    """Register ForcePreloadHeroImage right before the ReorderHead transformer.

    Args:
        configuration: Optimizer configuration mapping.

    Returns:
        New configuration dict with the transformer registered. It is
        appended at the end when no ReorderHead stage is configured.
    """
    transformers = list(configuration.get(KEY_TRANSFORMERS, []))

    if FORCE_PRELOAD_HERO_IMAGE in transformers:
        return {**configuration, KEY_TRANSFORMERS: transformers}

    position = next(
        (index for index, entry in enumerate(transformers) if is_reorder_head(entry)),
        None,
    )
    if position is not None:
        transformers.insert(position, FORCE_PRELOAD_HERO_IMAGE)
    else:
        logger.debug(f"No {REORDER_HEAD} transformer configured, appending hero preloading")
        transformers.append(FORCE_PRELOAD_HERO_IMAGE)

    return {**configuration, KEY_TRANSFORMERS: transformers}


def is_force_preload_enabled(query_params: Mapping[str, Any] | None = None) -> bool:
    """Return whether hero image preloading should be registered.

    Args:
        query_params: Request query parameters, if serving a request.

    Returns:
        False when the disable query variable is non-empty or the
        AMP_DISABLE_FORCE_PRELOAD_HERO_IMAGE env flag is set.
    """
    if query_params and query_params.get(DISABLE_QUERY_VAR):
        return False
    return not get_disable_force_preload_hero_image()


def register(
    configuration: Mapping[str, Any],
    query_params: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Apply the configuration filter unless hero preloading is disabled.

    Args:
        configuration: Optimizer configuration mapping.
        query_params: Request query parameters, if serving a request.

    Returns:
        Configuration dict, filtered when enabled.
    """
    if not is_force_preload_enabled(query_params):
        logger.info("Hero image preload injection disabled")
        return dict(configuration)
    return filter_optimizer_config(configuration)
