"""
Step definitions for Vercel DDNS integration tests.

Oracles are stubbed and records live in the mock provider, so these
scenarios never touch the network.
"""

from behave import given, when, then

from vercel_ddns.core.ddns_manager import DDNSManager
from vercel_ddns.core.errors import OracleError
from vercel_ddns.core.ip_resolver import IPResolver
from vercel_ddns.core.models import AddressFamily, DDNSConfig
from vercel_ddns.oracles.base_oracle import IPOracle
from vercel_ddns.providers.mock_provider import MockDNSProvider

UNREACHABLE = None


class ScriptedOracle(IPOracle):
    """Oracle that either reports a fixed address or is unreachable."""

    def __init__(self, family, answer, name):
        super().__init__(family)
        self.answer = answer
        self.name = name

    def attempt(self):
        if self.answer is UNREACHABLE:
            raise OracleError(self.name, "timed out")
        return self._check_answer(self.answer)


def _split(text):
    return [part.strip() for part in text.split(",")]


def _provider(context):
    if context.provider is None:
        context.provider = MockDNSProvider()
    return context.provider


def _resolver(context):
    chains = {}
    for family in AddressFamily:
        answers = list(context.oracle_answers[family.value])
        while len(answers) < 2:
            answers.append(UNREACHABLE)
        chains[family] = [
            ScriptedOracle(family, answer, name=f"oracle{i}") for i, answer in enumerate(answers)
        ]
    return IPResolver(chains)


def _result_for(context, subdomain):
    for result in context.report.results:
        if result.subdomain == subdomain:
            return result
    raise AssertionError(f"No result for '{subdomain}'")


@given('the domain "{domain}" with subdomains "{subdomains}"')
def step_impl(context, domain, subdomains):
    context.domain = domain
    context.subdomains = tuple(_split(subdomains))


@given("the record TTL is {ttl:d} seconds")
def step_impl(context, ttl):
    context.ttl = ttl


@given('the requested IP types are "{ip_types}"')
def step_impl(context, ip_types):
    context.families = _split(ip_types)


@given('the public IPv4 address is "{address}"')
def step_impl(context, address):
    context.oracle_answers["ipv4"] = [address]


@given("the primary IPv4 oracle is unreachable")
def step_impl(context):
    context.oracle_answers["ipv4"] = [UNREACHABLE]


@given('the fallback IPv4 oracle reports "{address}"')
def step_impl(context, address):
    context.oracle_answers["ipv4"].append(address)


@given("every IPv6 oracle is unreachable")
def step_impl(context):
    context.oracle_answers["ipv6"] = [UNREACHABLE, UNREACHABLE]


@given('the provider already has an "{record_type}" record "{name}" with value "{value}" and TTL {ttl:d}')
def step_impl(context, record_type, name, value, ttl):
    _provider(context).add_existing(context.domain, name, record_type, value, ttl=ttl)


@when("I run the DDNS updater")
def step_impl(context):
    config = DDNSConfig(
        domain=context.domain,
        subdomains=context.subdomains,
        token="test-token",
        families=tuple(AddressFamily.from_text(f) for f in context.families),
        ttl=context.ttl,
        provider="mock",
    )
    manager = DDNSManager(config, provider=_provider(context), resolver=_resolver(context))
    context.report = manager.run()


@then("the run succeeds")
def step_impl(context):
    assert context.report.success, f"Run failed: {context.report}"


@then('the run fails during "{stage}"')
def step_impl(context, stage):
    assert not context.report.success
    assert context.report.aborted_stage == stage, context.report.aborted_stage


@then('the outcome for "{subdomain}" is "{outcome}"')
def step_impl(context, subdomain, outcome):
    result = _result_for(context, subdomain)
    assert result.ok, f"'{subdomain}' failed: {result.error}"
    assert result.outcome.value == outcome, result.outcome


@then('the provider has an "{record_type}" record "{name}" with value "{value}" and TTL {ttl:d}')
def step_impl(context, record_type, name, value, ttl):
    matches = [
        r
        for r in _provider(context).records.get(context.domain, [])
        if r.name == name and r.type == record_type
    ]
    assert len(matches) == 1, f"Expected one {record_type} record for {name}, got {matches}"
    assert matches[0].value == value, matches[0]
    assert matches[0].ttl == ttl, matches[0]


@then("the provider received {count:d} update call")
@then("the provider received {count:d} update calls")
def step_impl(context, count):
    updates = [call for call in _provider(context).calls if call[0] == "update"]
    assert len(updates) == count, updates


@then("the provider received {count:d} create calls")
def step_impl(context, count):
    creates = [call for call in _provider(context).calls if call[0] == "create"]
    assert len(creates) == count, creates


@then("the provider received no calls")
def step_impl(context):
    assert _provider(context).calls == [], _provider(context).calls


@then("no record was written")
def step_impl(context):
    assert _provider(context).writes == [], _provider(context).writes
