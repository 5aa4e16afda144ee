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

# pyright: reportPrivateUsage=none
# pyright: reportUnknownMemberType=none
# This leads to too many false-positives around mocks.

import datetime

import hikari
import pytest

import kotae
from kotae import entities


def _user_payload(**kwargs: object) -> dict[str, object]:
    return {"id": "115590097100865541", "username": "nyaa", **kwargs}


class TestUser:
    def test_from_payload(self):
        user = entities.User.from_payload(
            _user_payload(global_name="Meow", discriminator="0", avatar="abc", bot=True, public_flags=1 << 6)
        )

        assert user.id == 115590097100865541
        assert user.username == "nyaa"
        assert user.global_name == "Meow"
        assert user.avatar_hash == "abc"
        assert user.is_bot is True
        assert user.is_system is False
        assert user.flags == hikari.UserFlag.HYPESQUAD_BRAVERY
        assert user.display_name == "Meow"
        assert user.mention == "<@115590097100865541>"

    def test_from_payload_when_username_missing(self):
        with pytest.raises(kotae.PayloadShapeError) as exc_info:
            entities.User.from_payload({"id": "123"})

        assert exc_info.value.kind == "user"
        assert exc_info.value.entity_id == "123"
        assert exc_info.value.field == "username"

    def test_created_at_property(self):
        user = entities.User.from_payload(_user_payload())

        assert user.created_at == datetime.datetime(2015, 11, 15, 23, 13, 46, 709000, tzinfo=datetime.timezone.utc)

    def test_update(self):
        user = entities.User.from_payload(_user_payload(global_name="Old"))

        user.update(_user_payload(username="new", global_name=None))

        assert user.username == "new"
        assert user.global_name is None
        assert user.display_name == "new"

    def test_update_when_malformed_leaves_user_unchanged(self):
        user = entities.User.from_payload(_user_payload())

        with pytest.raises(kotae.PayloadShapeError):
            user.update({"id": "115590097100865541"})

        assert user.username == "nyaa"

    def test_eq_and_hash(self):
        user = entities.User.from_payload(_user_payload())
        other = entities.User.from_payload(_user_payload(username="other"))

        assert user == other
        assert hash(user) == hash(other)
        assert int(user) == 115590097100865541


class TestRole:
    def test_from_payload(self):
        role = entities.Role.from_payload(
            {
                "id": "54",
                "name": "admin",
                "color": 0xFF0000,
                "permissions": "8",
                "position": 3,
                "hoist": True,
                "mentionable": True,
            },
            guild_id=hikari.Snowflake(1234),
        )

        assert role.id == 54
        assert role.name == "admin"
        assert role.guild_id == 1234
        assert role.color == hikari.Color(0xFF0000)
        assert role.permissions == hikari.Permissions.ADMINISTRATOR
        assert role.position == 3
        assert role.is_hoisted is True
        assert role.is_managed is False
        assert role.is_mentionable is True
        assert role.mention == "<@&54>"

    def test_from_payload_when_name_missing(self):
        with pytest.raises(kotae.PayloadShapeError) as exc_info:
            entities.Role.from_payload({"id": "54"}, guild_id=None)

        assert exc_info.value.field == "name"


class TestGuild:
    def test_from_payload(self):
        guild = entities.Guild.from_payload(
            {"id": "1234", "name": "Cool guild", "owner_id": "4321", "roles": [{"id": "1", "name": "@everyone"}]}
        )

        assert guild.id == 1234
        assert guild.name == "Cool guild"
        assert guild.owner_id == 4321
        assert list(guild.roles) == [1]
        assert guild.roles[hikari.Snowflake(1)].guild_id == 1234


class TestMember:
    def test_from_payload(self):
        user = entities.User.from_payload(_user_payload())
        guild = entities.Guild(
            id=hikari.Snowflake(1234),
            name="guild",
            roles={hikari.Snowflake(54): entities.Role(id=hikari.Snowflake(54), name="cool")},
        )

        member = entities.Member.from_payload(
            {
                "roles": ["54", "65"],
                "nick": "nick",
                "joined_at": "2021-06-02T14:06:01.432653+00:00",
                "premium_since": None,
                "permissions": "2048",
                "pending": True,
            },
            user=user,
            guild_id=hikari.Snowflake(1234),
            guild=guild,
        )

        assert member.id == user.id
        assert member.user is user
        assert member.guild_id == 1234
        assert member.role_ids == [54, 65]
        assert member.roles == [guild.roles[hikari.Snowflake(54)]]
        assert member.nickname == "nick"
        assert member.display_name == "nick"
        assert member.joined_at == datetime.datetime(2021, 6, 2, 14, 6, 1, 432653, tzinfo=datetime.timezone.utc)
        assert member.premium_since is None
        assert member.permissions == hikari.Permissions.SEND_MESSAGES
        assert member.is_pending is True
        assert member.is_partial is False
        assert member.mention == user.mention

    def test_from_payload_without_guild(self):
        user = entities.User.from_payload(_user_payload())

        member = entities.Member.from_payload({"roles": ["54"]}, user=user, guild_id=hikari.Snowflake(1234))

        assert member.is_partial is True
        assert member.roles == []
        assert member.role_ids == [54]

    def test_from_payload_when_roles_missing(self):
        user = entities.User.from_payload(_user_payload())

        with pytest.raises(kotae.PayloadShapeError) as exc_info:
            entities.Member.from_payload({"nick": "meow"}, user=user, guild_id=hikari.Snowflake(1234))

        assert exc_info.value.kind == "member"
        assert exc_info.value.entity_id == "115590097100865541"
        assert exc_info.value.field == "roles"

    def test_from_payload_with_zulu_timestamp(self):
        user = entities.User.from_payload(_user_payload())

        member = entities.Member.from_payload(
            {"roles": [], "communication_disabled_until": "2023-03-31T20:02:15Z"},
            user=user,
            guild_id=hikari.Snowflake(1234),
        )

        assert member.communication_disabled_until == datetime.datetime(
            2023, 3, 31, 20, 2, 15, tzinfo=datetime.timezone.utc
        )

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (
                "2021-06-02T14:06:01.432+00:00",
                datetime.datetime(2021, 6, 2, 14, 6, 1, 432000, tzinfo=datetime.timezone.utc),
            ),
            ("2021-06-02T14:06:01+00:00", datetime.datetime(2021, 6, 2, 14, 6, 1, tzinfo=datetime.timezone.utc)),
        ],
    )
    def test_from_payload_with_timestamp_precision(self, raw: str, expected: datetime.datetime):
        user = entities.User.from_payload(_user_payload())

        member = entities.Member.from_payload(
            {"roles": [], "joined_at": raw}, user=user, guild_id=hikari.Snowflake(1234)
        )

        assert member.joined_at == expected

    def test_from_payload_without_guild_id(self):
        user = entities.User.from_payload(_user_payload())

        member = entities.Member.from_payload({"roles": ["54"]}, user=user, guild_id=None)

        assert member.guild_id is None
        assert member.is_partial is True
        assert member.role_ids == [54]

    def test_update_keeps_user_and_fills_guild(self):
        user = entities.User.from_payload(_user_payload())
        guild = entities.Guild(id=hikari.Snowflake(1234), name="guild")
        member = entities.Member.from_payload({"roles": []}, user=user, guild_id=hikari.Snowflake(1234))

        member.update({"roles": ["1"], "nick": "new"}, guild=guild)

        assert member.user is user
        assert member.guild is guild
        assert member.nickname == "new"
        assert member.role_ids == [1]

    def test_eq_uses_guild_id(self):
        user = entities.User.from_payload(_user_payload())
        member = entities.Member(user=user, guild_id=hikari.Snowflake(1), role_ids=[])

        assert member == entities.Member(user=user, guild_id=hikari.Snowflake(1), role_ids=[hikari.Snowflake(5)])
        assert member != entities.Member(user=user, guild_id=hikari.Snowflake(2), role_ids=[])


class TestChannel:
    def test_from_payload(self):
        channel = entities.Channel.from_payload(
            {"id": "999", "type": 0, "name": "general", "parent_id": "111", "permissions": "1024"},
            guild_id=hikari.Snowflake(1234),
        )

        assert channel.id == 999
        assert channel.type == hikari.ChannelType.GUILD_TEXT
        assert channel.name == "general"
        assert channel.guild_id == 1234
        assert channel.parent_id == 111
        assert channel.permissions == hikari.Permissions.VIEW_CHANNEL
        assert channel.mention == "<#999>"

    def test_from_payload_when_type_missing(self):
        with pytest.raises(kotae.PayloadShapeError) as exc_info:
            entities.Channel.from_payload({"id": "999"}, guild_id=None)

        assert exc_info.value.kind == "channel"
        assert exc_info.value.field == "type"


class TestMessage:
    def test_from_payload(self):
        message = entities.Message.from_payload(
            {
                "id": "777",
                "channel_id": "888",
                "author": _user_payload(),
                "content": "hello",
                "embeds": [{"title": "meow"}],
                "flags": 64,
                "timestamp": "2023-03-31T20:02:15.173495+00:00",
                "edited_timestamp": None,
                "webhook_id": "666",
            }
        )

        assert message.id == 777
        assert message.channel_id == 888
        assert message.author
        assert message.author.username == "nyaa"
        assert message.content == "hello"
        assert message.embeds == [{"title": "meow"}]
        assert message.flags == hikari.MessageFlag.EPHEMERAL
        assert message.is_ephemeral is True
        assert message.timestamp == datetime.datetime(2023, 3, 31, 20, 2, 15, 173495, tzinfo=datetime.timezone.utc)
        assert message.edited_timestamp is None
        assert message.webhook_id == 666

    def test_from_payload_with_author(self):
        author = entities.User.from_payload(_user_payload())

        message = entities.Message.from_payload({"id": "777", "channel_id": "888", "author": {}}, author=author)

        assert message.author is author
        assert message.is_ephemeral is False

    def test_from_payload_when_channel_id_missing(self):
        with pytest.raises(kotae.PayloadShapeError) as exc_info:
            entities.Message.from_payload({"id": "777"})

        assert exc_info.value.kind == "message"
        assert exc_info.value.entity_id == "777"
        assert exc_info.value.field == "channel_id"
