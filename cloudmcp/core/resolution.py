"""Argument chain resolution.

Decides whether a command's required arguments are satisfied. Defaults are
applied first, every argument is recorded on the response, and suggestion
loaders run concurrently for each missing required argument.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from cloudmcp.core.arguments import ArgumentChain
from cloudmcp.core.context import CommandContext
from cloudmcp.models.argument import ArgumentInfo, ArgumentOption, sort_arguments

logger = logging.getLogger(__name__)


def _apply_default(entry: ArgumentChain[Any], args: Any) -> None:
    """Write the default back onto ``args``; failure leaves ``args`` untouched."""
    try:
        setattr(args, entry.attribute, entry.default_value)
    except (AttributeError, TypeError, ValueError) as exc:
        logger.debug("Could not apply default for %s: %s", entry.name, exc)


async def _load_suggestions(
    context: CommandContext,
    entry: ArgumentChain[Any],
    args: Any,
) -> list[ArgumentOption]:
    if entry.value_loader is None:
        return []
    try:
        options = await asyncio.wait_for(
            entry.value_loader(context, args),
            timeout=context.loader_timeout,
        )
    except TimeoutError:
        logger.warning(
            "Suggestion loader for %s timed out after %ss",
            entry.name,
            context.loader_timeout,
        )
        return []
    except Exception:
        logger.warning("Suggestion loader for %s failed", entry.name, exc_info=True)
        return []
    return list(options or [])


async def process_argument_chain(
    context: CommandContext,
    chain: Sequence[ArgumentChain[Any]],
    args: Any,
) -> bool:
    """Resolve ``chain`` against ``args`` and report readiness.

    Returns True only when every required argument has a value, either bound
    directly or taken from its default. The response keeps its default
    status either way; a False result is a negotiation, not a failure.
    """
    if not chain:
        return True

    if context.response.arguments is None:
        context.response.arguments = []

    records: dict[str, ArgumentInfo] = {}
    effective: dict[str, str] = {}
    for entry in chain:
        value = entry.read(args)
        if not value and entry.has_default:
            _apply_default(entry, args)
            value = entry.default_text or ""

        effective[entry.name] = value
        info = ArgumentInfo(
            name=entry.name,
            description=entry.description,
            value=value,
            command=entry.command,
            default=entry.default_text if not value else None,
            required=entry.required,
        )
        records[entry.name] = info
        context.response.arguments.append(info)

    missing = [entry for entry in chain if entry.required and not effective[entry.name]]
    if missing:
        suggestions = await asyncio.gather(
            *(_load_suggestions(context, entry, args) for entry in missing)
        )
        for entry, options in zip(missing, suggestions, strict=True):
            if options:
                records[entry.name].values = options

    sort_arguments(context.response.arguments)
    return not missing
