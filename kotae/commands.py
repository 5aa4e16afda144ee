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
"""Application command invocation data and its option tree."""
from __future__ import annotations

__all__: list[str] = ["CommandData", "Option", "OptionGroup", "OptionValue", "parse_option"]

import typing
from collections import abc as collections

import hikari

from . import _internal
from . import errors

if typing.TYPE_CHECKING:
    from typing_extensions import Self

    from . import entities
    from . import resolver as resolver_

_DefaultT = typing.TypeVar("_DefaultT")
_GROUP_TYPES: frozenset[int] = frozenset((hikari.OptionType.SUB_COMMAND, hikari.OptionType.SUB_COMMAND_GROUP))

ResolvedEntity = typing.Union["entities.Member", "entities.User", "entities.Role", "entities.Channel"]
"""Union of the entities an option's value can resolve to."""


class OptionValue(typing.NamedTuple):
    """A leaf option which holds a value."""

    name: str
    """The option's name."""

    type: typing.Union[hikari.OptionType, int]
    """The option's type."""

    value: typing.Any
    """The option's raw value.

    For user, role, channel and mentionable options this is the ID of the
    entity; see [OptionValue.resolve][kotae.commands.OptionValue.resolve].
    """

    is_focused: bool = False
    """Whether this option is focused (for autocomplete interactions)."""

    @typing.overload
    def resolve(self, resolved: typing.Optional[resolver_.ResolvedData], /) -> ResolvedEntity:
        ...

    @typing.overload
    def resolve(
        self, resolved: typing.Optional[resolver_.ResolvedData], /, *, default: _DefaultT
    ) -> typing.Union[ResolvedEntity, _DefaultT]:
        ...

    def resolve(
        self,
        resolved: typing.Optional[resolver_.ResolvedData],
        /,
        *,
        default: typing.Union[_DefaultT, _internal.NoDefault] = _internal.NO_DEFAULT,
    ) -> typing.Union[ResolvedEntity, _DefaultT]:
        """Resolve this option's value to the entity it references.

        Members are preferred over users for user and mentionable options.

        Parameters
        ----------
        resolved
            The interaction's resolved data.
        default
            Value to return if the entity wasn't resolved.

        Raises
        ------
        TypeError
            If this option's type doesn't reference an entity.
        LookupError
            If the entity isn't in the resolved data and no default was passed.
        """
        kinds = _RESOLVABLE_KINDS.get(self.type)
        if kinds is None:
            raise TypeError(f"Options of type {self.type!r} can't be resolved")

        entity_id = hikari.Snowflake(self.value)
        if resolved is not None:
            for kind in kinds:
                mapping: typing.Optional[collections.Mapping[hikari.Snowflake, typing.Any]] = getattr(resolved, kind)
                if mapping and (entity := mapping.get(entity_id)) is not None:
                    return entity

        if default is _internal.NO_DEFAULT:
            raise LookupError(f"{self.name!r} option's value {entity_id} wasn't resolved")

        return default


_RESOLVABLE_KINDS: dict[int, tuple[str, ...]] = {
    hikari.OptionType.USER: ("members", "users"),
    hikari.OptionType.MENTIONABLE: ("members", "users", "roles"),
    hikari.OptionType.ROLE: ("roles",),
    hikari.OptionType.CHANNEL: ("channels",),
}


class OptionGroup(typing.NamedTuple):
    """A sub-command or sub-command group option which holds nested options."""

    name: str
    """The group's name."""

    type: typing.Union[hikari.OptionType, int]
    """The group's type."""

    options: list[Option]
    """The group's nested options."""


Option = typing.Union[OptionValue, OptionGroup]
"""Union of the option tree's node types."""


def parse_option(payload: _internal.RawPayload, /) -> Option:
    """Parse an option payload into an option tree node.

    Raises
    ------
    kotae.errors.PayloadShapeError
        If the option or one of its nested options is malformed.
    """
    name = _internal.get_field(payload, "name", "option", convert=str)
    option_type = _internal.get_field(payload, "type", "option", name, convert=hikari.OptionType)
    if option_type in _GROUP_TYPES:
        return OptionGroup(name, option_type, [parse_option(option) for option in payload.get("options") or ()])

    if "value" not in payload:
        raise errors.PayloadShapeError("option", name, "value")

    return OptionValue(name, option_type, payload["value"], is_focused=payload.get("focused", False))


class CommandData:
    """Data of an application command invocation."""

    __slots__ = ("guild_id", "id", "name", "options", "resolved", "target_id", "type")

    def __init__(
        self,
        *,
        id: hikari.Snowflake,
        name: str,
        type: typing.Union[hikari.CommandType, int],
        options: collections.Sequence[Option] = (),
        resolved: typing.Optional[resolver_.ResolvedData] = None,
        target_id: typing.Optional[hikari.Snowflake] = None,
        guild_id: typing.Optional[hikari.Snowflake] = None,
    ) -> None:
        self.guild_id = guild_id
        self.id = id
        self.name = name
        self.options: list[Option] = list(options)
        self.resolved = resolved
        self.target_id = target_id
        self.type = type

    def __repr__(self) -> str:
        return f"CommandData(id={self.id!r}, name={self.name!r}, type={self.type!r})"

    @classmethod
    def from_payload(
        cls,
        payload: _internal.RawPayload,
        /,
        *,
        resolver: resolver_.Resolver,
        guild_id: typing.Optional[hikari.Snowflake] = None,
    ) -> Self:
        """Parse command data, hydrating its resolved block.

        Parameters
        ----------
        payload
            The interaction's raw `data` object.
        resolver
            The resolver used to hydrate the resolved block.
        guild_id
            ID of the guild the interaction was triggered in.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If the command data or its option tree is malformed.

            Malformed resolved entries are skipped instead.
        """
        raw_id = str(payload["id"]) if payload.get("id") is not None else None
        raw_resolved = payload.get("resolved")
        return cls(
            id=_internal.get_field(payload, "id", "command", raw_id, convert=hikari.Snowflake),
            name=_internal.get_field(payload, "name", "command", raw_id, convert=str),
            type=hikari.CommandType(payload.get("type", hikari.CommandType.SLASH)),
            options=[parse_option(option) for option in payload.get("options") or ()],
            resolved=resolver.resolve(raw_resolved, guild_id=guild_id) if raw_resolved is not None else None,
            target_id=_internal.optional_snowflake(payload.get("target_id")),
            guild_id=_internal.optional_snowflake(payload.get("guild_id")) or guild_id,
        )

    @property
    def target(self) -> typing.Union[entities.Member, entities.User, entities.Message, None]:
        """The resolved target of a context menu command.

        This is [None][] for slash commands or if the target wasn't resolved.
        """
        if self.target_id is None or self.resolved is None:
            return None

        for kind in ("members", "users", "messages"):
            mapping: typing.Optional[collections.Mapping[hikari.Snowflake, typing.Any]] = getattr(self.resolved, kind)
            if mapping and (entity := mapping.get(self.target_id)) is not None:
                return entity

        return None

    def _invoked_group(self) -> tuple[list[str], list[Option]]:
        path = [self.name]
        options = self.options
        while len(options) == 1 and isinstance(group := options[0], OptionGroup):
            path.append(group.name)
            options = group.options

        return path, options

    def invoked_path(self) -> str:
        """Full name of the invoked command including any sub-command groups (e.g. `"role add"`)."""
        return " ".join(self._invoked_group()[0])

    def leaf_options(self) -> dict[str, OptionValue]:
        """The value options of the invoked (sub-)command keyed by name."""
        return {option.name: option for option in self._invoked_group()[1] if isinstance(option, OptionValue)}
