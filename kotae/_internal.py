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
"""Internal functions and types used in Kotae."""
from __future__ import annotations

__all__: list[str] = []

import enum
import typing
from collections import abc as collections

import hikari

from . import errors

_T = typing.TypeVar("_T")
RawPayload = collections.Mapping[str, typing.Any]
"""Type hint of a decoded JSON object."""

ORIGINAL_MESSAGE: typing.Final[str] = "@original"
"""Sentinel message ID which refers to an interaction's initial response."""


class _NoDefaultEnum(enum.Enum):
    VALUE = object()


NO_DEFAULT = _NoDefaultEnum.VALUE
"""Internal singleton used to signify when a value wasn't provided."""

NoDefault = typing.Literal[_NoDefaultEnum.VALUE]
"""The type of `NO_DEFAULT`."""


def get_field(
    payload: RawPayload,
    field: str,
    kind: str,
    /,
    entity_id: typing.Optional[str] = None,
    *,
    convert: collections.Callable[[typing.Any], _T],
) -> _T:
    """Get and convert a required field from a payload.

    Raises
    ------
    kotae.errors.PayloadShapeError
        If the field is missing, null or couldn't be converted.
    """
    try:
        value = payload[field]

    except (KeyError, TypeError):
        raise errors.PayloadShapeError(kind, entity_id, field) from None

    if value is None:
        raise errors.PayloadShapeError(kind, entity_id, field)

    try:
        return convert(value)

    except (TypeError, ValueError):
        raise errors.PayloadShapeError(kind, entity_id, field) from None


def optional_snowflake(value: typing.Any, /) -> typing.Optional[hikari.Snowflake]:
    """Convert an optional raw ID to a snowflake."""
    return hikari.Snowflake(value) if value is not None else None


def message_id(value: typing.Union[str, int, hikari.SnowflakeishOr[hikari.PartialMessage]], /) -> str:
    """Normalise a message reference to the string form used in request paths."""
    if value == ORIGINAL_MESSAGE:
        return ORIGINAL_MESSAGE

    return str(hikari.Snowflake(value))
