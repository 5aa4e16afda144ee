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
"""Configuration for Kotae's command client."""
from __future__ import annotations

__all__: list[str] = ["AllowedMentionsModel", "Config"]

import json
import pathlib
import typing

import hikari
import pydantic
import pydantic_core
import toml

from . import content

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from typing_extensions import Self


_CONFIG_PARSERS: dict[str, collections.Callable[[typing.TextIO], typing.Any]] = {"json": json.load, "toml": toml.load}


def _cast_snowflake(value: int, /) -> hikari.Snowflake:
    if hikari.Snowflake.min() <= value <= hikari.Snowflake.max():
        return hikari.Snowflake(value)

    raise ValueError(f"{value} is not a valid snowflake")


@pydantic.GetPydanticSchema
def _snowflake_schema(
    _source_type: type[typing.Any], _handler: pydantic.GetCoreSchemaHandler
) -> pydantic_core.CoreSchema:
    # IDs are accepted as ints or as the platform's stringified IDs.
    from_schema = pydantic_core.core_schema.chain_schema(
        [
            pydantic_core.core_schema.int_schema(strict=False),
            pydantic_core.core_schema.no_info_plain_validator_function(_cast_snowflake),
        ]
    )
    return pydantic_core.core_schema.json_or_python_schema(
        json_schema=from_schema,
        python_schema=pydantic_core.core_schema.union_schema(
            [pydantic_core.core_schema.is_instance_schema(hikari.Snowflake), from_schema]
        ),
        serialization=pydantic_core.core_schema.plain_serializer_function_ser_schema(str),
    )


_Snowflake = typing.Annotated[hikari.Snowflake, _snowflake_schema]


class AllowedMentionsModel(pydantic.BaseModel):
    """Default allowed mentions for the messages sent by a client."""

    everyone: typing.Optional[bool] = None
    users: typing.Union[bool, list[_Snowflake], None] = None
    roles: typing.Union[bool, list[_Snowflake], None] = None

    def to_allowed_mentions(self) -> content.AllowedMentions:
        """Convert this model to the allowed mentions used when building responses."""
        return content.AllowedMentions(everyone=self.everyone, users=self.users, roles=self.roles)


class Config(pydantic.BaseModel):
    """Configuration for a [CommandClient][kotae.client.CommandClient]."""

    ephemeral_default: bool = False
    """Whether responses should default to ephemeral."""

    allowed_mentions: typing.Optional[AllowedMentionsModel] = None
    """Default allowed mentions for created and edited messages."""

    @classmethod
    def from_file(cls, path: typing.Union[str, pathlib.Path], /) -> Self:
        """Load the config from a file.

        Parameters
        ----------
        path
            Path to a `.json` or `.toml` config file.

        Raises
        ------
        ValueError
            If the file type isn't supported or the file's content is invalid.
        """
        path = pathlib.Path(path)
        file_type = path.name.rsplit(".", 1)[-1]
        try:
            load = _CONFIG_PARSERS[file_type]

        except KeyError:
            raise ValueError(f"Unknown config file type {file_type}") from None

        with path.open("r") as file:
            return cls.model_validate(load(file))

    def default_mentions(self) -> typing.Optional[content.AllowedMentions]:
        """The default allowed mentions as used when building responses."""
        if self.allowed_mentions is None:
            return None

        return self.allowed_mentions.to_allowed_mentions()
