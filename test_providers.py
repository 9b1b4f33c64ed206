#!/usr/bin/env python3
"""
Tests for the Vercel provider, the mock provider and the DNS oracles.
"""

import unittest
from unittest.mock import MagicMock, Mock, patch

import dns.exception
import dns.resolver
import requests

from vercel_ddns.core.errors import ConfigurationError, OracleError, ProviderUnavailable
from vercel_ddns.core.models import AddressFamily, ProviderRecord, RecordRequest
from vercel_ddns.oracles.dns_oracle import GoogleTXTOracle, OpenDNSOracle, default_oracles
from vercel_ddns.providers.dns_client import DNSClient
from vercel_ddns.providers.mock_provider import MockDNSProvider
from vercel_ddns.providers.vercel_provider import VercelProvider


def api_response(body, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.content = b"{}"
    response.json.return_value = body
    return response


def rdata(text):
    answer = Mock()
    answer.to_text.return_value = text
    return answer


class TestVercelProvider(unittest.TestCase):
    """Test the Vercel REST calls."""

    @patch("vercel_ddns.providers.vercel_provider.requests.Session")
    def test_list_records_follows_pagination(self, mock_session):
        session = mock_session.return_value
        session.request.side_effect = [
            api_response(
                {
                    "records": [
                        {"id": "rec_1", "name": "home", "type": "A", "value": "1.1.1.1", "ttl": 60}
                    ],
                    "pagination": {"next": 1700000000000},
                }
            ),
            api_response(
                {
                    "records": [
                        {"id": "rec_2", "name": "office", "type": "AAAA", "value": "2001:db8::1", "ttl": 60}
                    ],
                    "pagination": {"next": None},
                }
            ),
        ]
        provider = VercelProvider({"team_id": "team_1"})

        records = provider.list_records("example.com", "tok")

        self.assertEqual([r.id for r in records], ["rec_1", "rec_2"])
        self.assertIsInstance(records[0], ProviderRecord)
        first, second = session.request.call_args_list
        self.assertEqual(first.args, ("GET", "https://api.vercel.com/v4/domains/example.com/records"))
        self.assertEqual(first.kwargs["headers"], {"Authorization": "Bearer tok"})
        self.assertEqual(first.kwargs["params"], {"limit": 100, "teamId": "team_1"})
        self.assertEqual(second.kwargs["params"]["until"], 1700000000000)

    @patch("vercel_ddns.providers.vercel_provider.requests.Session")
    def test_unexpected_json_becomes_provider_unavailable(self, mock_session):
        mock_session.return_value.request.return_value = api_response(["not", "a", "mapping"])

        with self.assertRaises(ProviderUnavailable):
            VercelProvider().list_records("example.com", "tok")

    @patch("vercel_ddns.providers.vercel_provider.requests.Session")
    def test_malformed_records_become_provider_unavailable(self, mock_session):
        bodies = [
            {"records": [{"id": "rec_1", "name": "home", "type": "A", "value": "1.1.1.1", "ttl": "soon"}]},
            {"records": ["rec_1"]},
            {"records": [], "pagination": "next"},
        ]
        for body in bodies:
            with self.subTest(body=body):
                mock_session.return_value.request.return_value = api_response(body)
                with self.assertRaises(ProviderUnavailable):
                    VercelProvider().list_records("example.com", "tok")

    @patch("vercel_ddns.providers.vercel_provider.requests.Session")
    def test_create_record(self, mock_session):
        session = mock_session.return_value
        session.request.return_value = api_response({"uid": "rec_new"})
        provider = VercelProvider()

        record_id = provider.create_record(
            "example.com", "tok", RecordRequest("home", "203.0.113.7", "A", 3600)
        )

        self.assertEqual(record_id, "rec_new")
        call = session.request.call_args
        self.assertEqual(call.args, ("POST", "https://api.vercel.com/v2/domains/example.com/records"))
        self.assertEqual(
            call.kwargs["json"],
            {"name": "home", "type": "A", "value": "203.0.113.7", "ttl": 3600},
        )
        self.assertEqual(call.kwargs["timeout"], 10)

    @patch("vercel_ddns.providers.vercel_provider.requests.Session")
    def test_update_record(self, mock_session):
        session = mock_session.return_value
        session.request.return_value = api_response({})
        provider = VercelProvider({"timeout": 3})

        provider.update_record("example.com", "tok", "rec_1", "203.0.113.7", 60)

        call = session.request.call_args
        self.assertEqual(call.args, ("PATCH", "https://api.vercel.com/v1/domains/records/rec_1"))
        self.assertEqual(call.kwargs["json"], {"value": "203.0.113.7", "ttl": 60})
        self.assertEqual(call.kwargs["timeout"], 3)

    @patch("vercel_ddns.providers.vercel_provider.requests.Session")
    def test_http_error_becomes_provider_unavailable(self, mock_session):
        error_response = Mock(status_code=403, reason="Forbidden")
        error_response.json.return_value = {"error": {"code": "forbidden", "message": "Not authorized"}}
        response = api_response({})
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=error_response)
        mock_session.return_value.request.return_value = response

        with self.assertRaises(ProviderUnavailable) as ctx:
            VercelProvider().list_records("example.com", "tok")

        self.assertIn("HTTP 403: Not authorized", str(ctx.exception))
        self.assertNotIn("tok", str(ctx.exception))

    @patch("vercel_ddns.providers.vercel_provider.requests.Session")
    def test_transport_error_becomes_provider_unavailable(self, mock_session):
        mock_session.return_value.request.side_effect = requests.exceptions.ConnectTimeout("timed out")

        with self.assertRaises(ProviderUnavailable):
            VercelProvider().create_record(
                "example.com", "tok", RecordRequest("home", "203.0.113.7", "A", 3600)
            )


class TestMockDNSProvider(unittest.TestCase):
    """Test the mock DNS provider."""

    def setUp(self):
        self.provider = MockDNSProvider()

    def test_create_and_list(self):
        record_id = self.provider.create_record(
            "example.com", "tok", RecordRequest("home", "203.0.113.7", "A", 60)
        )

        records = self.provider.list_records("example.com", "tok")
        self.assertEqual(records, [ProviderRecord(record_id, "home", "A", "203.0.113.7", 60)])
        self.assertEqual(self.provider.list_records("other.com", "tok"), [])

    def test_update(self):
        record_id = self.provider.add_existing("example.com", "home", "A", "1.1.1.1")

        self.provider.update_record("example.com", "tok", record_id, "2.2.2.2", 60)

        record = self.provider.records["example.com"][0]
        self.assertEqual((record.value, record.ttl), ("2.2.2.2", 60))

    def test_update_unknown_record(self):
        with self.assertRaises(ProviderUnavailable):
            self.provider.update_record("example.com", "tok", "rec_404", "2.2.2.2", 60)

    def test_rejects_wrong_token(self):
        provider = MockDNSProvider({"token": "right"})
        with self.assertRaises(ProviderUnavailable):
            provider.list_records("example.com", "wrong")


class TestDNSClient(unittest.TestCase):
    """Test provider selection."""

    def test_selects_vercel_by_default(self):
        client = DNSClient({})
        self.assertIsInstance(client.provider, VercelProvider)

    def test_selects_mock(self):
        client = DNSClient({"default_provider": "mock"})
        self.assertIsInstance(client.provider, MockDNSProvider)

    def test_unknown_provider_is_rejected(self):
        with self.assertRaises(ConfigurationError):
            DNSClient({"default_provider": "route53"})

    def test_delegates(self):
        client = DNSClient({"default_provider": "mock"})
        request = RecordRequest("home", "203.0.113.7", "A", 60)

        record_id = client.create_record("example.com", "tok", request)
        client.update_record("example.com", "tok", record_id, "203.0.113.8", 60)

        self.assertEqual(client.list_records("example.com", "tok")[0].value, "203.0.113.8")


class TestDNSOracles(unittest.TestCase):
    """Test the DNS echo oracles against a stubbed resolver."""

    @patch("vercel_ddns.oracles.dns_oracle.dns.resolver.Resolver")
    def test_opendns_ipv4(self, mock_resolver):
        resolver = mock_resolver.return_value
        resolver.resolve.return_value = [rdata("203.0.113.7")]

        address = OpenDNSOracle(AddressFamily.IPV4, timeout=2).attempt()

        self.assertEqual(address, "203.0.113.7")
        mock_resolver.assert_called_once_with(configure=False)
        self.assertEqual(resolver.nameservers, ["208.67.222.222"])
        resolver.resolve.assert_called_once_with("myip.opendns.com", "A", lifetime=2)

    @patch("vercel_ddns.oracles.dns_oracle.dns.resolver.Resolver")
    def test_opendns_ipv6(self, mock_resolver):
        resolver = mock_resolver.return_value
        resolver.resolve.return_value = [rdata("2001:db8::7")]

        address = OpenDNSOracle(AddressFamily.IPV6).attempt()

        self.assertEqual(address, "2001:db8::7")
        resolver.resolve.assert_called_once_with("myip.opendns.com", "AAAA", lifetime=5.0)

    @patch("vercel_ddns.oracles.dns_oracle.dns.resolver.Resolver")
    def test_google_txt_answer_is_unquoted(self, mock_resolver):
        resolver = mock_resolver.return_value
        resolver.resolve.return_value = [rdata('"203.0.113.7"')]

        address = GoogleTXTOracle(AddressFamily.IPV4).attempt()

        self.assertEqual(address, "203.0.113.7")
        self.assertEqual(resolver.nameservers, ["216.239.32.10"])
        resolver.resolve.assert_called_once_with("o-o.myaddr.l.google.com", "TXT", lifetime=5.0)

    @patch("vercel_ddns.oracles.dns_oracle.dns.resolver.Resolver")
    def test_google_skips_unrelated_txt_strings(self, mock_resolver):
        mock_resolver.return_value.resolve.return_value = [
            rdata('"edns0-client-subnet 198.51.100.0/24"'),
            rdata('"2001:db8::7"'),
        ]

        self.assertEqual(GoogleTXTOracle(AddressFamily.IPV6).attempt(), "2001:db8::7")

    @patch("vercel_ddns.oracles.dns_oracle.dns.resolver.Resolver")
    def test_timeout_is_an_oracle_error(self, mock_resolver):
        mock_resolver.return_value.resolve.side_effect = dns.exception.Timeout()

        with self.assertRaises(OracleError) as ctx:
            OpenDNSOracle(AddressFamily.IPV4).attempt()

        self.assertEqual(ctx.exception.oracle, "opendns")
        self.assertIn("timed out", ctx.exception.cause)

    @patch("vercel_ddns.oracles.dns_oracle.dns.resolver.Resolver")
    def test_transport_errors_are_oracle_errors(self, mock_resolver):
        for error in (dns.resolver.NoNameservers(), OSError("Network is unreachable")):
            with self.subTest(error=type(error).__name__):
                mock_resolver.return_value.resolve.side_effect = error
                with self.assertRaises(OracleError):
                    OpenDNSOracle(AddressFamily.IPV6).attempt()

    @patch("vercel_ddns.oracles.dns_oracle.dns.resolver.Resolver")
    def test_wrong_family_answer_is_rejected(self, mock_resolver):
        mock_resolver.return_value.resolve.return_value = [rdata("2001:db8::7")]

        with self.assertRaises(OracleError):
            OpenDNSOracle(AddressFamily.IPV4).attempt()

    @patch("vercel_ddns.oracles.dns_oracle.dns.resolver.Resolver")
    def test_empty_answer_is_rejected(self, mock_resolver):
        mock_resolver.return_value.resolve.return_value = []

        with self.assertRaises(OracleError):
            GoogleTXTOracle(AddressFamily.IPV4).attempt()

    def test_default_oracles_order(self):
        chain = default_oracles(AddressFamily.IPV6, timeout=1.5)
        self.assertEqual([type(o) for o in chain], [OpenDNSOracle, GoogleTXTOracle])
        self.assertEqual(chain[1].nameserver, "2001:4860:4802:32::a")


if __name__ == "__main__":
    unittest.main(verbosity=2)
