"""Gateway to the Nix evaluator.

Classifies attribute paths as internal nodes (with child names) or leaves, and
evaluates leaves to printable text. Every call spawns one blocking process.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, Union

from .errors import EvaluatorError

logger = logging.getLogger(__name__)

COMPLETIONS_ENV_VAR = "NIX_GET_COMPLETIONS"
COMPLETIONS_LEVEL = "3"
COMPLETION_MARKER = "attrs"
DEFAULT_COMMAND: tuple[str, ...] = ("nix",)


@dataclass(frozen=True)
class Internal:
    """Attribute set with at least one child name, in evaluator order."""

    children: tuple[str, ...]


@dataclass(frozen=True)
class Leaf:
    """Attribute without children.

    ``value`` stays ``None`` until the path is evaluated. ``failed`` marks
    values that hold the evaluator's stderr instead of its output.
    """

    value: str | None = None
    failed: bool = False


Classification = Union[Internal, Leaf]


class AttributeEvaluator(Protocol):
    def classify(self, path: str) -> Classification: ...

    def evaluate(self, path: str) -> Leaf: ...


def completion_query(path: str) -> str:
    """Return ``path`` in the form that asks the evaluator for child names."""
    if path.endswith(".") or path.endswith("#"):
        return path
    return f"{path}."


def parse_completions(stdout: str, query: str) -> list[str]:
    """Extract bare child names from completion-mode output.

    Marker lines are dropped, then the query prefix is removed from each line.
    Names that end up empty, equal to the marker, or still dotted are skipped.
    """
    names: list[str] = []
    for line in stdout.splitlines():
        line = line.strip()
        if not line or line == COMPLETION_MARKER:
            continue
        name = line[len(query):] if line.startswith(query) else line
        if not name or name == COMPLETION_MARKER or "." in name:
            continue
        names.append(name)
    return names


def classification_from_names(names: Sequence[str]) -> Classification:
    if names:
        return Internal(tuple(names))
    return Leaf()


class NixEvaluator:
    """Production gateway that runs ``nix eval`` once per request."""

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMMAND,
        extra_args: Sequence[str] = (),
        completions_level: str = COMPLETIONS_LEVEL,
    ) -> None:
        self.command = tuple(command) or DEFAULT_COMMAND
        self.extra_args = tuple(extra_args)
        self.completions_level = completions_level

    def _argv(self, *args: str) -> list[str]:
        return [*self.command, *self.extra_args, "eval", *args]

    def _run(self, path: str, argv: list[str], env: Mapping[str, str] | None) -> subprocess.CompletedProcess[str]:
        logger.debug("running %s", argv)
        try:
            proc = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                env=env,
            )
        except OSError as exc:
            raise EvaluatorError(path, f"could not run {argv[0]}: {exc}") from exc
        logger.debug("%s exited with status %d", argv[0], proc.returncode)
        return proc

    def classify(self, path: str) -> Classification:
        query = completion_query(path)
        env = dict(os.environ)
        env[COMPLETIONS_ENV_VAR] = self.completions_level
        proc = self._run(path, self._argv("--raw", query), env)
        if proc.returncode != 0:
            raise EvaluatorError(path, proc.stderr, proc.returncode)
        return classification_from_names(parse_completions(proc.stdout, query))

    def evaluate(self, path: str) -> Leaf:
        proc = self._run(path, self._argv(path), None)
        if proc.returncode != 0:
            logger.info("evaluation of %s failed with status %d", path, proc.returncode)
            return Leaf(value=proc.stderr, failed=True)
        return Leaf(value=proc.stdout)


@dataclass
class TableEvaluator:
    """In-memory gateway backed by a path -> children table.

    ``children`` maps a path (without trailing ``.``) to its child names; a
    path mapped to an empty sequence is a leaf. ``values`` holds leaf output
    and ``errors`` holds leaf stderr. Unknown paths fail classification the
    way the real evaluator does for a missing attribute.
    """

    children: dict[str, Sequence[str]] = field(default_factory=dict)
    values: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)

    @staticmethod
    def _key(path: str) -> str:
        return path[:-1] if path.endswith(".") else path

    def classify(self, path: str) -> Classification:
        self.calls.append(("classify", path))
        key = self._key(path)
        if key not in self.children:
            raise EvaluatorError(path, f"error: attribute '{key}' missing", 1)
        return classification_from_names(list(self.children[key]))

    def evaluate(self, path: str) -> Leaf:
        self.calls.append(("evaluate", path))
        if path in self.values:
            return Leaf(value=self.values[path])
        message = self.errors.get(path, f"error: attribute '{path}' missing\n")
        return Leaf(value=message, failed=True)


def table_from_tree(root: str, tree: Mapping[str, object], values: Iterable[tuple[str, str]] = ()) -> TableEvaluator:
    """Build a ``TableEvaluator`` from nested dicts rooted at ``root``.

    Dict values become internal nodes; anything else is a leaf whose ``str()``
    is its evaluated value. Child paths are joined with ``.`` like the
    navigator does.
    """
    table = TableEvaluator()

    def visit(path: str, node: Mapping[str, object]) -> None:
        table.children[path] = list(node.keys())
        for name, child in node.items():
            child_path = f"{path}.{name}"
            if isinstance(child, Mapping):
                visit(child_path, child)
            else:
                table.children[child_path] = []
                table.values[child_path] = f"{child}\n"

    visit(root, tree)
    table.values.update(dict(values))
    return table
