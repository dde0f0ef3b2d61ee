"""Response unwrapping and text marshalers.

Text marshalers never trust the handler's output: they unwrap it, check it
has the exact type their command documents, and only then render it. A wrong
shape is an integration defect and raises `PayloadShapeMismatch` rather than
printing an empty string.
"""

from __future__ import annotations

import io
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from ..models import PayloadShapeMismatch

if TYPE_CHECKING:
    from .models import Response

__all__ = [
    "MessageOutput",
    "message_text_marshaler",
    "text_marshaler",
    "unwrap_output",
]

T = TypeVar("T")


@dataclass(frozen=True)
class MessageOutput:
    """Output of commands answering with a single message."""

    message: str


def unwrap_output(output: Any) -> Any:  # noqa: ANN401
    """Extract the payload of a handler output.

    A streamed output (any iterator, e.g. a generator emitting results) gives
    its first value, or None if the stream is already exhausted. Other values
    are the payload themselves.
    """
    if isinstance(output, Iterator):
        return next(output, None)
    return output


def text_marshaler(expected: type[T], render: Callable[[T], str]) -> Callable[[Response], io.StringIO]:
    """Build the text marshaler of a command whose output is an `expected` instance.

    Args:
        expected: exact type the command's handler outputs
        render: renders a checked payload as text
    """

    def marshal(response: Response) -> io.StringIO:
        value = unwrap_output(response.output)
        if type(value) is not expected:
            raise PayloadShapeMismatch(expected, value)
        return io.StringIO(render(value))

    marshal.__doc__ = f"Render a {expected.__name__} as text."
    return marshal


message_text_marshaler = text_marshaler(MessageOutput, lambda out: out.message)
