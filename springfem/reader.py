# springfem/reader.py
"""
MODEL DEFINITION READER
=======================

Reads the plain-text model-definition format into a SpringModel.

FORMAT:
-------
Whitespace-separated tokens; line breaks carry no meaning.

    // single-line comment
    /* block
       comment */

    node <id> [d <displacement>] [f <force>]
    spring <id> <node1 id> <node2 id> <spring constant>

The d/f clauses may appear in any order and repeat; the last one wins.
Nodes must be defined before the springs that reference them.

EXAMPLE:
--------
    // Logan, Example 2.1
    node 1 d 0
    node 2 d 0
    node 3
    node 4 f 5000

    spring 1  1 3  1000
    spring 2  3 4  2000
    spring 3  4 2  3000
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .fem import SpringModel
from .kernel.errors import ValidationError

logger = logging.getLogger(__name__)

_COMMENT = re.compile(r'//[^\n]*|/\*.*?(?:\*/|\Z)', re.DOTALL)
_TOKEN = re.compile(r'\S+')


class ModelDefinitionError(ValidationError):
    """Raised for malformed or inconsistent model-definition input."""

    def __init__(self, message: str, source: str = "<string>", line: Optional[int] = None):
        self.source = source
        self.line = line
        location = source if line is None else f"{source}:{line}"
        super().__init__(f"{location}: {message}")


def _blank_comment(match: re.Match) -> str:
    # Keep the line breaks so token line numbers stay correct
    return "\n" * match.group(0).count("\n")


def tokenize(text: str) -> List[Tuple[str, int]]:
    """Split definition text into (token, line number) pairs, comments removed."""
    text = _COMMENT.sub(_blank_comment, text)
    tokens = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        for match in _TOKEN.finditer(line):
            tokens.append((match.group(0), lineno))
    return tokens


class _Parser:

    def __init__(self, model: SpringModel, tokens: List[Tuple[str, int]], source: str):
        self.model = model
        self.tokens = tokens
        self.source = source
        self.pos = 0

    def _error(self, message: str, line: Optional[int] = None) -> ModelDefinitionError:
        if line is None:
            line = self.tokens[-1][1] if self.tokens else None
        return ModelDefinitionError(message, self.source, line)

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos][0]
        return None

    def _next(self, expected: str) -> Tuple[str, int]:
        if self.pos >= len(self.tokens):
            raise self._error(f"Expected {expected}, got end of input")
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def _int(self) -> int:
        token, line = self._next("an integer")
        try:
            return int(token)
        except ValueError:
            raise self._error(f"Expected an integer, got {token!r}", line) from None

    def _float(self) -> float:
        token, line = self._next("a number")
        try:
            return float(token)
        except ValueError:
            raise self._error(f"Expected a number, got {token!r}", line) from None

    def parse(self) -> None:
        while self.pos < len(self.tokens):
            token, line = self._next("a definition")
            try:
                if token == "node":
                    self._node()
                elif token == "spring":
                    self._spring()
                else:
                    raise self._error(f"Unexpected token: {token}", line)
            except ModelDefinitionError:
                raise
            except ValidationError as e:
                raise self._error(str(e), line) from e

    def _node(self) -> None:
        id = self._int()
        self.model.add_node(id)
        while self._peek() in ("d", "f"):
            key, _ = self._next("d or f")
            value = self._float()
            if key == "d":
                self.model.add_displacement(id, value)
            else:
                self.model.add_force(id, value)

    def _spring(self) -> None:
        id = self._int()
        node1 = self._int()
        node2 = self._int()
        spring_constant = self._float()
        self.model.add_spring(id, node1, node2, spring_constant)


def parse_model_text(
    text: str,
    model: Optional[SpringModel] = None,
    source: str = "<string>"
) -> SpringModel:
    """
    Parse definition text into model (a new SpringModel if None).

    Raises:
        ModelDefinitionError: On syntax errors, duplicate ids or unknown node ids
    """
    if model is None:
        model = SpringModel()
    _Parser(model, tokenize(text), source).parse()
    return model


def read_model(
    paths: Union[str, Path, Iterable[Union[str, Path]]],
    model: Optional[SpringModel] = None
) -> SpringModel:
    """
    Read one or more definition files into a single model, in order.

    Later files may reference nodes defined in earlier ones.
    """
    if isinstance(paths, (str, Path)):
        paths = [paths]
    if model is None:
        model = SpringModel()

    for path in paths:
        path = Path(path)
        logger.info("Reading model definition %s", path)
        try:
            text = path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise ModelDefinitionError(
                f"Not a UTF-8 text file ({e.reason} at byte {e.start})", str(path)
            ) from e
        parse_model_text(text, model, source=str(path))

    logger.debug("Model has %d nodes and %d springs", model.number_of_nodes, model.number_of_springs)
    return model

