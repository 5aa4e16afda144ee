# -*- coding: utf-8 -*-
# BSD 3-Clause License
#
# Copyright (c) 2020-2024, Faster Speeding
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notfice, this
#   list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of the copyright holder nor the names of its
#   contributors may be used to endorse or promote products derived from
#   this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
# OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""Errors raised by Kotae."""
from __future__ import annotations

__all__: list[str] = [
    "AlreadyAcknowledgedError",
    "EmptyContentError",
    "InteractionStateError",
    "KotaeError",
    "NotYetAcknowledgedError",
    "PayloadShapeError",
]

import typing


class KotaeError(Exception):
    """Base class for all errors raised by Kotae."""


class InteractionStateError(KotaeError, RuntimeError):
    """Error raised when a response operation isn't valid for an interaction's current state.

    These are raised before any request is made.
    """

    def __init__(self, operation: str, message: str, /) -> None:
        super().__init__(message)
        self.operation: str = operation
        """Name of the operation which was refused."""


class AlreadyAcknowledgedError(InteractionStateError):
    """Error raised when trying to create a second initial response."""

    def __init__(self, operation: str, /) -> None:
        super().__init__(operation, f"{operation} cannot be used as the interaction has already been acknowledged")


class NotYetAcknowledgedError(InteractionStateError):
    """Error raised when a followup operation is used before the interaction has been acknowledged."""

    def __init__(self, operation: str, /) -> None:
        super().__init__(
            operation,
            f"{operation} cannot be used to acknowledge an interaction, "
            "defer or create the initial message response first",
        )


class EmptyContentError(KotaeError, ValueError):
    """Error raised when a message response has neither text content nor embeds."""

    def __init__(self) -> None:
        super().__init__("Message responses must have content or embeds")


class PayloadShapeError(KotaeError, ValueError):
    """Error raised when an entity payload is missing a required field."""

    def __init__(self, kind: str, entity_id: typing.Optional[str], field: str, /) -> None:
        if entity_id is None:
            message = f"Malformed {kind} payload: missing required field {field!r}"

        else:
            message = f"Malformed {kind} payload for {entity_id}: missing required field {field!r}"

        super().__init__(message)
        self.entity_id: typing.Optional[str] = entity_id
        """Raw ID of the entity this error is scoped to, if known."""

        self.field: str = field
        """Name of the missing or invalid field."""

        self.kind: str = kind
        """The kind of entity which failed to parse (e.g. `"user"`)."""

