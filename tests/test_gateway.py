"""Tests for the SMS gateways."""

import base64
import unittest
from urllib.parse import parse_qs

import httpx

from components.core.config import Settings
from components.reminder.gateway import LogOnlyGateway, TwilioSMSGateway, build_gateway


def make_twilio(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TwilioSMSGateway(
        account_sid="AC123",
        auth_token="secret",
        from_number="+15550009999",
        base_url="https://twilio.test/2010-04-01",
        client=client,
    )


class TwilioSMSGatewayTests(unittest.IsolatedAsyncioTestCase):
    async def test_successful_send_posts_form_with_basic_auth(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(201, json={"sid": "SM1"})

        gateway = make_twilio(handler)
        try:
            delivered = await gateway.send("+15550001111", "Hello")
        finally:
            await gateway.aclose()

        self.assertTrue(delivered)
        self.assertEqual(seen["url"], "https://twilio.test/2010-04-01/Accounts/AC123/Messages.json")
        self.assertEqual(seen["auth"], "Basic " + base64.b64encode(b"AC123:secret").decode())
        self.assertEqual(seen["form"], {"To": ["+15550001111"], "From": ["+15550009999"], "Body": ["Hello"]})

    async def test_non_object_json_body_still_counts_as_delivered(self):
        gateway = make_twilio(lambda request: httpx.Response(201, json=["queued"]))
        try:
            self.assertTrue(await gateway.send("+15550001111", "Hello"))
        finally:
            await gateway.aclose()

    async def test_empty_body_still_counts_as_delivered(self):
        gateway = make_twilio(lambda request: httpx.Response(201, content=b""))
        try:
            self.assertTrue(await gateway.send("+15550001111", "Hello"))
        finally:
            await gateway.aclose()

    async def test_error_status_is_reported_as_undelivered(self):
        gateway = make_twilio(lambda request: httpx.Response(400, json={"message": "invalid number"}))
        try:
            self.assertFalse(await gateway.send("bad", "Hello"))
        finally:
            await gateway.aclose()

    async def test_transport_error_is_reported_as_undelivered(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        gateway = make_twilio(handler)
        try:
            self.assertFalse(await gateway.send("+15550001111", "Hello"))
        finally:
            await gateway.aclose()


class LogOnlyGatewayTests(unittest.IsolatedAsyncioTestCase):
    async def test_always_succeeds(self):
        self.assertTrue(await LogOnlyGateway().send("+15550001111", "Hello"))


class BuildGatewayTests(unittest.IsolatedAsyncioTestCase):
    async def test_missing_credentials_selects_log_only(self):
        settings = Settings(TWILIO_ACCOUNT_SID=None, TWILIO_AUTH_TOKEN=None, TWILIO_PHONE_NUMBER=None)
        self.assertIsInstance(build_gateway(settings), LogOnlyGateway)

    async def test_partial_credentials_select_log_only(self):
        settings = Settings(TWILIO_ACCOUNT_SID="AC123", TWILIO_AUTH_TOKEN="secret", TWILIO_PHONE_NUMBER=None)
        self.assertIsInstance(build_gateway(settings), LogOnlyGateway)

    async def test_full_credentials_select_twilio(self):
        settings = Settings(
            TWILIO_ACCOUNT_SID="AC123",
            TWILIO_AUTH_TOKEN="secret",
            TWILIO_PHONE_NUMBER="+15550009999",
        )
        gateway = build_gateway(settings)
        try:
            self.assertIsInstance(gateway, TwilioSMSGateway)
        finally:
            await gateway.aclose()
