"""End-to-end request handling through RequestRouter."""

from types import MappingProxyType

import pytest

from acronym_bot.core.errors import DispatchError
from acronym_bot.services.request_router import RequestRouter, build_request_router
from slack_payloads import (
    CHANNEL_CREATED,
    MESSAGE_WITH_BUTTON,
    TEAM_JOIN,
    app_mention_body,
    app_mention_with_deep_sibling,
    challenge_body,
    event_callback_body,
    signed_headers,
)


@pytest.fixture
def router(settings, acronyms, dispatcher):
    return RequestRouter(settings, acronyms, dispatcher)


@pytest.mark.asyncio
async def test_challenge_is_echoed(router, dispatcher):
    body = challenge_body("abc123")

    response = await router.handle("POST", signed_headers(body), body)

    assert response.status_code == 200
    assert response.body == "abc123"
    assert response.headers["content-type"] == "text/plain"
    dispatcher.dispatch.assert_not_called()


@pytest.mark.asyncio
async def test_app_mention_is_resolved_and_dispatched(settings, dispatcher):
    router = RequestRouter(settings, MappingProxyType({"LOL": ["laugh out loud"]}), dispatcher)
    body = app_mention_body([" LOL"])

    response = await router.handle("POST", signed_headers(body), body)

    assert response.status_code == 200
    assert response.body == '{"text":"acronym"}'
    dispatcher.dispatch.assert_awaited_once_with("C0LAN2Q65", ["laugh out loud"])


@pytest.mark.asyncio
async def test_other_event_types_get_204_without_dispatch(router, dispatcher):
    body = app_mention_body(["LOL"], event_type="reaction_added")

    response = await router.handle("POST", signed_headers(body), body)

    assert response.status_code == 204
    assert response.body == ""
    dispatcher.dispatch.assert_not_called()


@pytest.mark.asyncio
async def test_bad_signature_is_401(router, dispatcher):
    body = app_mention_body(["LOL"])
    headers = signed_headers(body, secret="wrong-secret")

    response = await router.handle("POST", headers, body)

    assert response.status_code == 401
    assert response.body == "Signature verification failed. You are not Slack!"
    dispatcher.dispatch.assert_not_called()


@pytest.mark.asyncio
async def test_bad_signature_on_unparseable_body_is_still_401(router):
    body = b"not json at all"

    response = await router.handle("POST", signed_headers(body, secret="wrong-secret"), body)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_unknown_acronym_dispatches_fallback(settings, dispatcher):
    router = RequestRouter(settings, MappingProxyType({}), dispatcher)
    body = app_mention_body(["XYZ"])

    response = await router.handle("POST", signed_headers(body), body)

    assert response.status_code == 200
    dispatcher.dispatch.assert_awaited_once_with("C0LAN2Q65", ["No definition found for XYZ"])


@pytest.mark.asyncio
async def test_multiple_definitions_are_dispatched_in_order(router, dispatcher):
    body = app_mention_body(["PR"])

    await router.handle("POST", signed_headers(body), body)

    dispatcher.dispatch.assert_awaited_once_with("C0LAN2Q65", ["pull request", "public relations"])


@pytest.mark.asyncio
async def test_malformed_payload_is_400(router, dispatcher):
    body = b"[not, an, object"

    response = await router.handle("POST", signed_headers(body), body)

    assert response.status_code == 400
    dispatcher.dispatch.assert_not_called()


@pytest.mark.asyncio
async def test_dispatch_failure_is_502(router, dispatcher):
    dispatcher.dispatch.side_effect = DispatchError("connection refused")
    body = app_mention_body(["LOL"])

    response = await router.handle("POST", signed_headers(body), body)

    assert response.status_code == 502
    dispatcher.dispatch.assert_awaited_once()


@pytest.mark.asyncio
async def test_challenge_with_wrong_token_is_204(router):
    body = challenge_body("abc123", token="not-our-token")

    response = await router.handle("POST", signed_headers(body), body)

    assert response.status_code == 204


@pytest.mark.asyncio
async def test_empty_signed_body_is_204(router):
    response = await router.handle("POST", signed_headers(b""), b"")

    assert response.status_code == 204


def test_as_lambda_response():
    from acronym_bot.services.request_router import RouterResponse

    response = RouterResponse(200, "abc123", {"content-type": "text/plain"})

    assert response.as_lambda_response() == {
        "statusCode": 200,
        "headers": {"content-type": "text/plain"},
        "body": "abc123",
    }


def test_build_request_router_rejects_missing_secrets(settings):
    from dataclasses import replace

    with pytest.raises(ValueError, match="SLACK_SIGNING_SECRET"):
        build_request_router(replace(settings, slack_signing_secret=""))


def test_build_request_router_loads_packaged_table(settings):
    router = build_request_router(settings)
    assert router._acronyms["EOD"] == ("end of day",)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "event",
    [CHANNEL_CREATED, TEAM_JOIN, MESSAGE_WITH_BUTTON],
    ids=["channel_created", "team_join", "message_with_button"],
)
async def test_real_non_mention_events_get_204(router, dispatcher, event):
    body = event_callback_body(event)

    response = await router.handle("POST", signed_headers(body), body)

    assert response.status_code == 204
    assert response.body == ""
    dispatcher.dispatch.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("depth", [50, 300])
async def test_deep_sibling_element_does_not_block_reply(router, dispatcher, depth):
    body = app_mention_with_deep_sibling(depth)

    response = await router.handle("POST", signed_headers(body), body)

    assert response.status_code == 200
    assert response.body == '{"text":"acronym"}'
    dispatcher.dispatch.assert_awaited_once_with("C0LAN2Q65", ["laugh out loud"])


@pytest.mark.asyncio
async def test_app_mention_with_unusable_channel_is_400(router, dispatcher):
    body = event_callback_body({"type": "app_mention", "channel": {"id": "C1"}})

    response = await router.handle("POST", signed_headers(body), body)

    assert response.status_code == 400
    dispatcher.dispatch.assert_not_called()
