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

import hikari
import pytest

import kotae
from kotae import cache
from kotae import commands
from kotae import resolver


@pytest.fixture()
def resolver_() -> resolver.Resolver:
    memory_cache = cache.MemoryCache()
    return resolver.Resolver(memory_cache, memory_cache)


class TestParseOption:
    def test_for_value(self):
        option = commands.parse_option({"name": "text", "type": 3, "value": "meow"})

        assert option == commands.OptionValue("text", hikari.OptionType.STRING, "meow")

    def test_for_focused_value(self):
        option = commands.parse_option({"name": "text", "type": 3, "value": "me", "focused": True})

        assert isinstance(option, commands.OptionValue)
        assert option.is_focused is True

    def test_for_nested_groups(self):
        option = commands.parse_option(
            {
                "name": "role",
                "type": 2,
                "options": [
                    {"name": "add", "type": 1, "options": [{"name": "role", "type": 8, "value": "54"}]},
                ],
            }
        )

        assert option == commands.OptionGroup(
            "role",
            hikari.OptionType.SUB_COMMAND_GROUP,
            [
                commands.OptionGroup(
                    "add", hikari.OptionType.SUB_COMMAND, [commands.OptionValue("role", hikari.OptionType.ROLE, "54")]
                )
            ],
        )

    def test_for_sub_command_without_options(self):
        option = commands.parse_option({"name": "ping", "type": 1})

        assert option == commands.OptionGroup("ping", hikari.OptionType.SUB_COMMAND, [])

    def test_when_value_missing(self):
        with pytest.raises(kotae.PayloadShapeError) as exc_info:
            commands.parse_option({"name": "text", "type": 3})

        assert exc_info.value.kind == "option"
        assert exc_info.value.entity_id == "text"
        assert exc_info.value.field == "value"

    def test_when_name_missing(self):
        with pytest.raises(kotae.PayloadShapeError) as exc_info:
            commands.parse_option({"type": 3, "value": 1})

        assert exc_info.value.field == "name"


class TestOptionValue:
    def test_resolve_prefers_member(self, resolver_: resolver.Resolver):
        resolved = resolver_.resolve(
            {"users": {"1": {"id": "1", "username": "one"}}, "members": {"1": {"roles": []}}}, guild_id=100
        )
        option = commands.OptionValue("user", hikari.OptionType.USER, "1")

        result = option.resolve(resolved)

        assert resolved.members
        assert result is resolved.members[hikari.Snowflake(1)]

    def test_resolve_falls_back_to_user(self, resolver_: resolver.Resolver):
        resolved = resolver_.resolve({"users": {"1": {"id": "1", "username": "one"}}})
        option = commands.OptionValue("user", hikari.OptionType.USER, "1")

        result = option.resolve(resolved)

        assert resolved.users
        assert result is resolved.users[hikari.Snowflake(1)]

    def test_resolve_mentionable_role(self, resolver_: resolver.Resolver):
        resolved = resolver_.resolve({"roles": {"10": {"id": "10", "name": "ten"}}})
        option = commands.OptionValue("target", hikari.OptionType.MENTIONABLE, "10")

        result = option.resolve(resolved)

        assert resolved.roles
        assert result is resolved.roles[hikari.Snowflake(10)]

    def test_resolve_channel(self, resolver_: resolver.Resolver):
        resolved = resolver_.resolve({"channels": {"20": {"id": "20", "type": 0}}})
        option = commands.OptionValue("channel", hikari.OptionType.CHANNEL, "20")

        assert option.resolve(resolved) is (resolved.channels or {})[hikari.Snowflake(20)]

    def test_resolve_when_missing(self):
        option = commands.OptionValue("role", hikari.OptionType.ROLE, "10")

        with pytest.raises(LookupError):
            option.resolve(resolver.ResolvedData(roles={}))

    def test_resolve_when_missing_with_default(self):
        option = commands.OptionValue("role", hikari.OptionType.ROLE, "10")

        assert option.resolve(None, default="default") == "default"

    def test_resolve_for_non_entity_option(self):
        option = commands.OptionValue("text", hikari.OptionType.STRING, "meow")

        with pytest.raises(TypeError):
            option.resolve(resolver.ResolvedData())


class TestCommandData:
    def test_from_payload(self, resolver_: resolver.Resolver):
        data = commands.CommandData.from_payload(
            {
                "id": "999",
                "name": "echo",
                "type": 1,
                "options": [{"name": "text", "type": 3, "value": "hi"}],
            },
            resolver=resolver_,
            guild_id=hikari.Snowflake(100),
        )

        assert data.id == 999
        assert data.name == "echo"
        assert data.type == hikari.CommandType.SLASH
        assert data.options == [commands.OptionValue("text", hikari.OptionType.STRING, "hi")]
        assert data.resolved is None
        assert data.target_id is None
        assert data.target is None
        assert data.guild_id == 100
        assert data.invoked_path() == "echo"
        assert data.leaf_options() == {"text": commands.OptionValue("text", hikari.OptionType.STRING, "hi")}

    def test_from_payload_when_name_missing(self, resolver_: resolver.Resolver):
        with pytest.raises(kotae.PayloadShapeError) as exc_info:
            commands.CommandData.from_payload({"id": "999", "type": 1}, resolver=resolver_)

        assert exc_info.value.kind == "command"
        assert exc_info.value.entity_id == "999"
        assert exc_info.value.field == "name"

    def test_sub_command_helpers(self, resolver_: resolver.Resolver):
        data = commands.CommandData.from_payload(
            {
                "id": "999",
                "name": "role",
                "type": 1,
                "options": [
                    {
                        "name": "member",
                        "type": 2,
                        "options": [
                            {
                                "name": "add",
                                "type": 1,
                                "options": [
                                    {"name": "user", "type": 6, "value": "1"},
                                    {"name": "role", "type": 8, "value": "10"},
                                ],
                            }
                        ],
                    }
                ],
            },
            resolver=resolver_,
        )

        assert data.invoked_path() == "role member add"
        assert list(data.leaf_options()) == ["user", "role"]
        assert data.leaf_options()["role"].value == "10"

    def test_target_for_user_command(self, resolver_: resolver.Resolver):
        data = commands.CommandData.from_payload(
            {
                "id": "999",
                "name": "Info",
                "type": 2,
                "target_id": "1",
                "resolved": {"users": {"1": {"id": "1", "username": "one"}}},
            },
            resolver=resolver_,
        )

        assert data.type == hikari.CommandType.USER
        assert data.resolved
        assert data.resolved.users
        assert data.target is data.resolved.users[hikari.Snowflake(1)]

    def test_target_for_message_command(self, resolver_: resolver.Resolver):
        data = commands.CommandData.from_payload(
            {
                "id": "999",
                "name": "Quote",
                "type": 3,
                "target_id": "30",
                "resolved": {"messages": {"30": {"id": "30", "channel_id": "20", "content": "hi"}}},
            },
            resolver=resolver_,
        )

        assert isinstance(data.target, kotae.entities.Message)
        assert data.target.content == "hi"
