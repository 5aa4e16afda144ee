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

import pytest

from kotae import errors


def test_already_acknowledged_error():
    error = errors.AlreadyAcknowledgedError("defer")

    assert isinstance(error, errors.InteractionStateError)
    assert isinstance(error, RuntimeError)
    assert error.operation == "defer"
    assert str(error) == "defer cannot be used as the interaction has already been acknowledged"


def test_not_yet_acknowledged_error():
    error = errors.NotYetAcknowledgedError("create_followup")

    assert isinstance(error, errors.InteractionStateError)
    assert error.operation == "create_followup"
    assert str(error) == (
        "create_followup cannot be used to acknowledge an interaction, "
        "defer or create the initial message response first"
    )


def test_empty_content_error():
    error = errors.EmptyContentError()

    assert isinstance(error, ValueError)
    assert str(error) == "Message responses must have content or embeds"


@pytest.mark.parametrize(
    ("entity_id", "expected"),
    [
        (None, "Malformed user payload: missing required field 'username'"),
        ("123", "Malformed user payload for 123: missing required field 'username'"),
    ],
)
def test_payload_shape_error(entity_id: str, expected: str):
    error = errors.PayloadShapeError("user", entity_id, "username")

    assert isinstance(error, ValueError)
    assert str(error) == expected
