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
"""Typed entities hydrated from interaction payloads."""
from __future__ import annotations

__all__: list[str] = ["Channel", "Guild", "Member", "Message", "Role", "User"]

import datetime
import typing
from collections import abc as collections

import hikari
from hikari.internal import time

from . import _internal

if typing.TYPE_CHECKING:
    from typing_extensions import Self

_T = typing.TypeVar("_T")


def _optional(
    payload: _internal.RawPayload,
    field: str,
    kind: str,
    entity_id: typing.Optional[str],
    convert: collections.Callable[[typing.Any], _T],
    /,
) -> typing.Optional[_T]:
    if payload.get(field) is None:
        return None

    return _internal.get_field(payload, field, kind, entity_id, convert=convert)


def _raw_id(payload: _internal.RawPayload, /) -> typing.Optional[str]:
    raw = payload.get("id")
    return str(raw) if raw is not None else None


def _permissions(value: typing.Any, /) -> hikari.Permissions:
    return hikari.Permissions(int(value))


def _timestamp(value: typing.Any, /) -> datetime.datetime:
    if not isinstance(value, str):
        raise TypeError("Expected an ISO 8601 timestamp string")

    return time.iso8601_datetime_string_to_datetime(value)


class _Unique:
    __slots__ = ()

    id: hikari.Snowflake

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.id == typing.cast("_Unique", other).id

    def __hash__(self) -> int:
        return hash(self.id)

    def __int__(self) -> int:
        return int(self.id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"

    @property
    def created_at(self) -> datetime.datetime:
        """When this entity was created."""
        return self.id.created_at

    def _replace_from(self, other: Self, /) -> None:
        for slots in (getattr(cls, "__slots__", ()) for cls in type(self).__mro__):
            for slot in slots:
                setattr(self, slot, getattr(other, slot))


class User(_Unique):
    """A platform user."""

    __slots__ = ("avatar_hash", "discriminator", "flags", "global_name", "id", "is_bot", "is_system", "username")

    def __init__(
        self,
        *,
        id: hikari.Snowflake,
        username: str,
        global_name: typing.Optional[str] = None,
        discriminator: str = "0",
        avatar_hash: typing.Optional[str] = None,
        is_bot: bool = False,
        is_system: bool = False,
        flags: hikari.UserFlag = hikari.UserFlag.NONE,
    ) -> None:
        self.avatar_hash = avatar_hash
        self.discriminator = discriminator
        self.flags = flags
        self.global_name = global_name
        self.id = id
        self.is_bot = is_bot
        self.is_system = is_system
        self.username = username

    @classmethod
    def from_payload(cls, payload: _internal.RawPayload, /) -> Self:
        """Build a user from its JSON payload.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If `id` or `username` is missing.
        """
        raw_id = _raw_id(payload)
        return cls(
            id=_internal.get_field(payload, "id", "user", raw_id, convert=hikari.Snowflake),
            username=_internal.get_field(payload, "username", "user", raw_id, convert=str),
            global_name=payload.get("global_name"),
            discriminator=payload.get("discriminator") or "0",
            avatar_hash=payload.get("avatar"),
            is_bot=payload.get("bot", False),
            is_system=payload.get("system", False),
            flags=hikari.UserFlag(payload.get("public_flags", 0)),
        )

    @property
    def display_name(self) -> str:
        """The user's global name, falling back to their username."""
        return self.global_name or self.username

    @property
    def mention(self) -> str:
        """Mention string for this user."""
        return f"<@{self.id}>"

    def update(self, payload: _internal.RawPayload, /) -> None:
        """Update this user in-place from a newer payload."""
        self._replace_from(self.from_payload(payload))


class Role(_Unique):
    """A guild role."""

    __slots__ = (
        "color",
        "guild_id",
        "id",
        "is_hoisted",
        "is_managed",
        "is_mentionable",
        "name",
        "permissions",
        "position",
    )

    def __init__(
        self,
        *,
        id: hikari.Snowflake,
        name: str,
        guild_id: typing.Optional[hikari.Snowflake] = None,
        color: hikari.Color = hikari.Color(0),
        permissions: hikari.Permissions = hikari.Permissions.NONE,
        position: int = 0,
        is_hoisted: bool = False,
        is_managed: bool = False,
        is_mentionable: bool = False,
    ) -> None:
        self.color = color
        self.guild_id = guild_id
        self.id = id
        self.is_hoisted = is_hoisted
        self.is_managed = is_managed
        self.is_mentionable = is_mentionable
        self.name = name
        self.permissions = permissions
        self.position = position

    @classmethod
    def from_payload(cls, payload: _internal.RawPayload, /, *, guild_id: typing.Optional[hikari.Snowflake]) -> Self:
        """Build a role from its JSON payload.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If `id` or `name` is missing.
        """
        raw_id = _raw_id(payload)
        return cls(
            id=_internal.get_field(payload, "id", "role", raw_id, convert=hikari.Snowflake),
            name=_internal.get_field(payload, "name", "role", raw_id, convert=str),
            guild_id=guild_id,
            color=hikari.Color(payload.get("color", 0)),
            permissions=_optional(payload, "permissions", "role", raw_id, _permissions) or hikari.Permissions.NONE,
            position=payload.get("position", 0),
            is_hoisted=payload.get("hoist", False),
            is_managed=payload.get("managed", False),
            is_mentionable=payload.get("mentionable", False),
        )

    @property
    def mention(self) -> str:
        """Mention string for this role."""
        return f"<@&{self.id}>"


class Guild(_Unique):
    """A guild tracked by a guild registry."""

    __slots__ = ("id", "name", "owner_id", "roles")

    def __init__(
        self,
        *,
        id: hikari.Snowflake,
        name: str,
        owner_id: typing.Optional[hikari.Snowflake] = None,
        roles: typing.Optional[dict[hikari.Snowflake, Role]] = None,
    ) -> None:
        self.id = id
        self.name = name
        self.owner_id = owner_id
        self.roles: dict[hikari.Snowflake, Role] = roles if roles is not None else {}

    @classmethod
    def from_payload(cls, payload: _internal.RawPayload, /) -> Self:
        """Build a guild from its JSON payload, including its roles.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If `id` or `name` is missing or a role is malformed.
        """
        raw_id = _raw_id(payload)
        guild_id = _internal.get_field(payload, "id", "guild", raw_id, convert=hikari.Snowflake)
        roles = (Role.from_payload(role, guild_id=guild_id) for role in payload.get("roles") or ())
        return cls(
            id=guild_id,
            name=_internal.get_field(payload, "name", "guild", raw_id, convert=str),
            owner_id=_internal.optional_snowflake(payload.get("owner_id")),
            roles={role.id: role for role in roles},
        )


class Member(_Unique):
    """A user's membership of a guild.

    A member hydrated while its guild wasn't known is "partial": it still
    has its role IDs but [Member.roles][kotae.entities.Member.roles] can't
    resolve them.
    """

    __slots__ = (
        "avatar_hash",
        "communication_disabled_until",
        "guild",
        "guild_id",
        "is_pending",
        "joined_at",
        "nickname",
        "permissions",
        "premium_since",
        "role_ids",
        "user",
    )

    def __init__(
        self,
        *,
        user: User,
        guild_id: typing.Optional[hikari.Snowflake],
        role_ids: collections.Sequence[hikari.Snowflake],
        guild: typing.Optional[Guild] = None,
        nickname: typing.Optional[str] = None,
        avatar_hash: typing.Optional[str] = None,
        joined_at: typing.Optional[datetime.datetime] = None,
        premium_since: typing.Optional[datetime.datetime] = None,
        communication_disabled_until: typing.Optional[datetime.datetime] = None,
        permissions: typing.Optional[hikari.Permissions] = None,
        is_pending: bool = False,
    ) -> None:
        self.avatar_hash = avatar_hash
        self.communication_disabled_until = communication_disabled_until
        self.guild = guild
        self.guild_id = guild_id
        self.is_pending = is_pending
        self.joined_at = joined_at
        self.nickname = nickname
        self.permissions = permissions
        self.premium_since = premium_since
        self.role_ids = list(role_ids)
        self.user = user

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Member) and (self.guild_id, self.id) == (other.guild_id, other.id)

    def __hash__(self) -> int:
        return hash((self.guild_id, self.id))

    def __repr__(self) -> str:
        return f"Member(guild_id={self.guild_id!r}, id={self.id!r}, is_partial={self.is_partial!r})"

    @classmethod
    def from_payload(
        cls,
        payload: _internal.RawPayload,
        /,
        *,
        user: User,
        guild_id: typing.Optional[hikari.Snowflake],
        guild: typing.Optional[Guild] = None,
    ) -> Self:
        """Build a member from its JSON payload.

        Parameters
        ----------
        payload
            The member's payload. This doesn't need to include the `user` field.
        user
            The member's already hydrated user.
        guild_id
            ID of the member's guild.

            This is [None][] when the member was received outside of its guild.
        guild
            The member's guild if known.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If `roles` is missing or any field is malformed.
        """
        raw_id = str(user.id)
        return cls(
            user=user,
            guild_id=guild_id,
            guild=guild,
            role_ids=_internal.get_field(payload, "roles", "member", raw_id, convert=_role_ids),
            nickname=payload.get("nick"),
            avatar_hash=payload.get("avatar"),
            joined_at=_optional(payload, "joined_at", "member", raw_id, _timestamp),
            premium_since=_optional(payload, "premium_since", "member", raw_id, _timestamp),
            communication_disabled_until=_optional(
                payload, "communication_disabled_until", "member", raw_id, _timestamp
            ),
            permissions=_optional(payload, "permissions", "member", raw_id, _permissions),
            is_pending=payload.get("pending", False),
        )

    @property
    def display_name(self) -> str:
        """The member's nickname, falling back to their user's display name."""
        return self.nickname or self.user.display_name

    @property
    def id(self) -> hikari.Snowflake:  # type: ignore[override]
        """The member's user ID."""
        return self.user.id

    @property
    def is_partial(self) -> bool:
        """Whether this member was hydrated without its guild."""
        return self.guild is None

    @property
    def mention(self) -> str:
        """Mention string for this member."""
        return self.user.mention

    @property
    def roles(self) -> list[Role]:
        """The member's roles resolved against its guild.

        This will be empty for partial members; use
        [Member.role_ids][kotae.entities.Member.role_ids] instead.
        """
        if self.guild is None:
            return []

        return [self.guild.roles[role_id] for role_id in self.role_ids if role_id in self.guild.roles]

    def update(self, payload: _internal.RawPayload, /, *, guild: typing.Optional[Guild] = None) -> None:
        """Update this member in-place from a newer payload.

        The member's user is kept. Passing `guild` replaces a missing guild.
        """
        self._replace_from(
            self.from_payload(payload, user=self.user, guild_id=self.guild_id, guild=guild or self.guild)
        )


def _role_ids(value: typing.Any, /) -> list[hikari.Snowflake]:
    return [hikari.Snowflake(role_id) for role_id in value]


class Channel(_Unique):
    """A channel referenced by an interaction."""

    __slots__ = ("guild_id", "id", "name", "parent_id", "permissions", "type")

    def __init__(
        self,
        *,
        id: hikari.Snowflake,
        type: typing.Union[hikari.ChannelType, int],
        name: typing.Optional[str] = None,
        guild_id: typing.Optional[hikari.Snowflake] = None,
        parent_id: typing.Optional[hikari.Snowflake] = None,
        permissions: typing.Optional[hikari.Permissions] = None,
    ) -> None:
        self.guild_id = guild_id
        self.id = id
        self.name = name
        self.parent_id = parent_id
        self.permissions = permissions
        self.type = type

    @classmethod
    def from_payload(cls, payload: _internal.RawPayload, /, *, guild_id: typing.Optional[hikari.Snowflake]) -> Self:
        """Build a channel from its JSON payload.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If `id` or `type` is missing.
        """
        raw_id = _raw_id(payload)
        return cls(
            id=_internal.get_field(payload, "id", "channel", raw_id, convert=hikari.Snowflake),
            type=_internal.get_field(payload, "type", "channel", raw_id, convert=hikari.ChannelType),
            name=payload.get("name"),
            guild_id=_internal.optional_snowflake(payload.get("guild_id")) or guild_id,
            parent_id=_internal.optional_snowflake(payload.get("parent_id")),
            permissions=_optional(payload, "permissions", "channel", raw_id, _permissions),
        )

    @property
    def mention(self) -> str:
        """Mention string for this channel."""
        return f"<#{self.id}>"


class Message(_Unique):
    """A message, either referenced by an interaction or created as a response."""

    __slots__ = (
        "attachments",
        "author",
        "channel_id",
        "content",
        "edited_timestamp",
        "embeds",
        "flags",
        "id",
        "timestamp",
        "webhook_id",
    )

    def __init__(
        self,
        *,
        id: hikari.Snowflake,
        channel_id: hikari.Snowflake,
        author: typing.Optional[User] = None,
        content: str = "",
        embeds: collections.Sequence[collections.Mapping[str, typing.Any]] = (),
        attachments: collections.Sequence[collections.Mapping[str, typing.Any]] = (),
        flags: hikari.MessageFlag = hikari.MessageFlag.NONE,
        timestamp: typing.Optional[datetime.datetime] = None,
        edited_timestamp: typing.Optional[datetime.datetime] = None,
        webhook_id: typing.Optional[hikari.Snowflake] = None,
    ) -> None:
        self.attachments = list(attachments)
        self.author = author
        self.channel_id = channel_id
        self.content = content
        self.edited_timestamp = edited_timestamp
        self.embeds = list(embeds)
        self.flags = flags
        self.id = id
        self.timestamp = timestamp
        self.webhook_id = webhook_id

    @classmethod
    def from_payload(cls, payload: _internal.RawPayload, /, *, author: typing.Optional[User] = None) -> Self:
        """Build a message from its JSON payload.

        Parameters
        ----------
        payload
            The message's payload.
        author
            The message's already hydrated author.

            If not provided then the author is built from the payload.

        Raises
        ------
        kotae.errors.PayloadShapeError
            If `id` or `channel_id` is missing or the author is malformed.
        """
        raw_id = _raw_id(payload)
        if author is None and (raw_author := payload.get("author")) is not None:
            author = User.from_payload(raw_author)

        return cls(
            id=_internal.get_field(payload, "id", "message", raw_id, convert=hikari.Snowflake),
            channel_id=_internal.get_field(payload, "channel_id", "message", raw_id, convert=hikari.Snowflake),
            author=author,
            content=payload.get("content") or "",
            embeds=payload.get("embeds") or (),
            attachments=payload.get("attachments") or (),
            flags=hikari.MessageFlag(payload.get("flags") or 0),
            timestamp=_optional(payload, "timestamp", "message", raw_id, _timestamp),
            edited_timestamp=_optional(payload, "edited_timestamp", "message", raw_id, _timestamp),
            webhook_id=_internal.optional_snowflake(payload.get("webhook_id")),
        )

    @property
    def is_ephemeral(self) -> bool:
        """Whether this message is only visible to the interaction's user."""
        return bool(self.flags & hikari.MessageFlag.EPHEMERAL)
