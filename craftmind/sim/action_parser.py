"""Parse the ``ACTION: <verb> <params>`` line out of model output."""

from __future__ import annotations

import logging
import re

from craftmind.sim.contracts import Action

logger = logging.getLogger(__name__)

ACTION_PATTERN = re.compile(r"ACTION:\s*(\w+)\s*(.*)", re.IGNORECASE)


def parse_action(model_output: str) -> Action | None:
    """Return the first action in ``model_output`` or ``None`` if there is none."""
    match = ACTION_PATTERN.search(model_output or "")
    if match is None:
        logger.info("Could not parse action from response: %.100s", model_output)
        return None

    verb, param_text = match.groups()
    raw = param_text.strip()
    params = tuple(token for token in raw.split() if token)
    return Action(type=verb.lower(), params=params or None, raw=raw)
