"""Tests for the top.gg vote webhook receiver."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from aiohttp import ClientSession

from becca.server.webhook import VoteServer, create_app

AUTH = "top-secret"


@pytest.fixture
def dispatch():
    with patch("becca.server.webhook.send_vote_message", new_callable=AsyncMock) as mock:
        yield mock


@pytest.fixture
def bot():
    return MagicMock()


@pytest.fixture
async def http(aiohttp_client, bot):
    return await aiohttp_client(create_app(bot, AUTH))


class TestReceiveVote:
    """Tests for POST /votes."""

    async def test_bot_vote_is_dispatched(self, http, bot, dispatch):
        response = await http.post(
            "/votes",
            json={"bot": "716707753090875473", "user": "465650873650118659", "type": "upvote"},
            headers={"Authorization": AUTH},
        )

        assert response.status == 204
        dispatch.assert_awaited_once()

        client, notification = dispatch.await_args.args
        assert client is bot
        assert notification.kind == "bot"
        assert notification.user_id == 465650873650118659

    async def test_server_vote_is_dispatched(self, http, dispatch):
        response = await http.post(
            "/votes",
            json={"guild": "778130114772598785", "user": "465650873650118659", "type": "upvote"},
            headers={"Authorization": AUTH},
        )

        assert response.status == 204
        assert dispatch.await_args.args[1].kind == "server"

    async def test_unrecognised_payload_is_dispatched_as_unknown(self, http, dispatch):
        response = await http.post(
            "/votes",
            json={"user": "465650873650118659"},
            headers={"Authorization": AUTH},
        )

        assert response.status == 204
        assert dispatch.await_args.args[1].kind == "unknown"

    @pytest.mark.parametrize("headers", [{}, {"Authorization": "wrong"}])
    async def test_bad_authorization_is_rejected(self, http, dispatch, headers):
        response = await http.post(
            "/votes",
            json={"bot": "1", "user": "2"},
            headers=headers,
        )

        assert response.status == 401
        dispatch.assert_not_awaited()

    async def test_non_json_body_is_rejected(self, http, dispatch):
        response = await http.post(
            "/votes",
            data="definitely not json",
            headers={"Authorization": AUTH},
        )

        assert response.status == 400
        dispatch.assert_not_awaited()

    async def test_non_object_body_is_rejected(self, http, dispatch):
        response = await http.post("/votes", json=[1, 2], headers={"Authorization": AUTH})

        assert response.status == 400
        dispatch.assert_not_awaited()

    async def test_missing_user_is_rejected(self, http, dispatch):
        response = await http.post("/votes", json={"bot": "1"}, headers={"Authorization": AUTH})

        assert response.status == 400
        dispatch.assert_not_awaited()

    async def test_non_boolean_weekend_flag_is_rejected(self, http, dispatch):
        response = await http.post(
            "/votes",
            json={"bot": "1", "user": "2", "isWeekend": "false"},
            headers={"Authorization": AUTH},
        )

        assert response.status == 400
        dispatch.assert_not_awaited()

    async def test_only_post_is_routed(self, http, dispatch):
        response = await http.get("/votes")

        assert response.status == 405


class TestVoteServer:
    """Tests for running the app with VoteServer."""

    async def test_serves_and_closes(self, dispatch):
        server = VoteServer(MagicMock(), auth=AUTH, host="127.0.0.1", port=0)
        await server.start()

        try:
            host, port = server._runner.addresses[0][:2]

            async with ClientSession() as session:
                async with session.post(f"http://{host}:{port}/votes", json={"bot": "1", "user": "2"}) as response:
                    assert response.status == 401

                async with session.post(
                    f"http://{host}:{port}/votes",
                    json={"bot": "1", "user": "2"},
                    headers={"Authorization": AUTH},
                ) as response:
                    assert response.status == 204
        finally:
            await server.close()

        assert server._runner is None
        dispatch.assert_awaited_once()

    async def test_close_before_start_is_a_noop(self):
        server = VoteServer(MagicMock(), auth=AUTH, host="127.0.0.1", port=0)

        await server.close()

        assert server._runner is None
