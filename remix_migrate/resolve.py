"""
Resolve the runtime and server adapter a Remix project targets.

Inference runs in a fixed order and the first rule that matches wins:

1. A single ``@remix-run/<adapter>`` dependency decides both adapter and runtime.
2. A ``remix setup [runtime]`` postinstall script decides the runtime.
3. A ``@remix-run/serve`` dependency means the node runtime.
4. Otherwise the user is asked.

Outcomes that would end the migration (conflicting adapters, user cancel) are
returned as values so the CLI decides how to exit.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from rich.console import Console
from rich.prompt import IntPrompt

from remix_migrate.exceptions import MultipleAdaptersError
from remix_migrate.models import ManifestSnapshot
from remix_migrate.packages import (
    BASELINE_RUNTIME,
    REMIX_NAMESPACE,
    Adapter,
    Runtime,
    adapter_runtime,
    is_adapter,
    is_runtime,
)

logger = logging.getLogger(__name__)

# `remix setup [--flag ...] [runtime]`; flags before the runtime are skipped
REMIX_SETUP_PATTERN = re.compile(r"remix setup(?![\w-])(?:\s+--?[\w-]+(?:=\S*)?)*(?:\s+(\w+))?")
SERVE_PACKAGE = "serve"
CANCEL_LABEL = "Nevermind..."

RuntimePrompt = Callable[[Sequence[Runtime]], Runtime | None]


@dataclass(frozen=True)
class Resolved:
    """Migration target. When ``adapter`` is set, ``runtime`` is the one it implies."""

    runtime: Runtime
    adapter: Adapter | None = None


@dataclass(frozen=True)
class AmbiguousAdapter:
    """Several adapter packages were found and none can be picked."""

    packages: tuple[str, ...]

    def error(self) -> MultipleAdaptersError:
        return MultipleAdaptersError(list(self.packages))


@dataclass(frozen=True)
class UserCancelled:
    """The user backed out of the runtime prompt."""


Resolution = Resolved | AmbiguousAdapter | UserCancelled


def find_remix_dependencies(dependencies: Mapping[str, str] | None) -> list[str]:
    """
    List Remix packages in a dependency mapping, without the namespace prefix.

    Example:
        >>> find_remix_dependencies({"@remix-run/node": "1.3.0", "react": "17"})
        ['node']
    """
    return [
        dep[len(REMIX_NAMESPACE) :]
        for dep in (dependencies or {})
        if dep.startswith(REMIX_NAMESPACE)
    ]


def resolve_adapter(manifest: ManifestSnapshot) -> Adapter | AmbiguousAdapter | None:
    """
    Find the server adapter listed in dependencies.

    Returns:
        The adapter, AmbiguousAdapter when more than one is listed,
        or None when there is no adapter dependency
    """
    matched = [dep for dep in find_remix_dependencies(manifest.dependencies) if is_adapter(dep)]

    if len(matched) > 1:
        packages = tuple(f"{REMIX_NAMESPACE}{dep}" for dep in matched)
        logger.debug(f"Conflicting adapters: {packages}")
        return AmbiguousAdapter(packages)

    if len(matched) == 1:
        return Adapter(matched[0])

    return None


def prompt_for_runtime(runtimes: Sequence[Runtime], console: Console | None = None) -> Runtime | None:
    """
    Ask which runtime the project uses.

    Shows a numbered list of runtimes followed by a cancel option.

    Returns:
        The chosen runtime, or None if the user picked the cancel option
        or input ended
    """
    console = console or Console()
    labels = [str(runtime) for runtime in runtimes] + [CANCEL_LABEL]

    console.print("[bold]Which server runtime is this project using?[/bold]")
    for index, label in enumerate(labels, start=1):
        console.print(f"  {index}. {label}")

    try:
        choice = IntPrompt.ask(
            "Select",
            console=console,
            choices=[str(i) for i in range(1, len(labels) + 1)],
            show_choices=False,
        )
    except EOFError:
        # Closed stdin counts as backing out
        logger.debug("No answer to runtime prompt (end of input)")
        return None
    if choice > len(runtimes):
        return None
    return runtimes[choice - 1]


def _runtime_from_postinstall(postinstall: str | None) -> Runtime | None:
    if not postinstall:
        return None

    match = REMIX_SETUP_PATTERN.search(postinstall)
    if match is None:
        return None

    token = match.group(1)
    # `remix setup` with no argument sets up node
    if token is None:
        return BASELINE_RUNTIME
    if is_runtime(token):
        return Runtime(token)

    logger.debug(f"Ignoring unrecognized runtime in postinstall: {token}")
    return None


def resolve_runtime(
    manifest: ManifestSnapshot,
    adapter: Adapter | None = None,
    prompt: RuntimePrompt = prompt_for_runtime,
) -> Runtime | None:
    """
    Infer the runtime from the manifest, asking the user as a last resort.

    Args:
        manifest: Project manifest
        adapter: Adapter already resolved from dependencies, if any
        prompt: Called with the known runtimes when nothing else decides

    Returns:
        The runtime, or None if the user cancelled the prompt
    """
    runtime = _runtime_from_postinstall(manifest.postinstall)
    if runtime is not None:
        logger.info(f"Runtime '{runtime}' inferred from postinstall script")
        return runtime

    # @remix-run/serve only runs on node
    if SERVE_PACKAGE in find_remix_dependencies(manifest.dependencies):
        logger.info(f"Runtime '{BASELINE_RUNTIME}' inferred from {REMIX_NAMESPACE}serve")
        return BASELINE_RUNTIME

    if adapter is not None:
        return adapter_runtime(adapter)

    logger.info("Could not infer runtime, asking user")
    return prompt(list(Runtime))


def resolve(manifest: ManifestSnapshot, prompt: RuntimePrompt = prompt_for_runtime) -> Resolution:
    """
    Determine the adapter and runtime to migrate toward.

    Args:
        manifest: Project manifest
        prompt: Interactive runtime prompt, only called when inference fails

    Returns:
        Resolved, AmbiguousAdapter or UserCancelled
    """
    adapter = resolve_adapter(manifest)

    if isinstance(adapter, AmbiguousAdapter):
        return adapter

    if adapter is not None:
        runtime = adapter_runtime(adapter)
        logger.info(f"Adapter '{adapter}' found in dependencies, runtime '{runtime}'")
        return Resolved(runtime=runtime, adapter=adapter)

    runtime = resolve_runtime(manifest, prompt=prompt)
    if runtime is None:
        return UserCancelled()
    return Resolved(runtime=runtime)
