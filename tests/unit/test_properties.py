"""Property-based tests using Hypothesis.

Covers invariants for reference classification, ARN region extraction,
environment collection, indirection documents, resolved environments and
retry backoff.
"""

from __future__ import annotations

import json
import string

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from resolve_aws_secrets.core.config.retry import RetryConfig
from resolve_aws_secrets.core.resilience.retry import RetryExecutor
from resolve_aws_secrets.core.secrets.base import ReferenceKind, ResolvedEnv
from resolve_aws_secrets.core.secrets.classifier import classify, region_of
from resolve_aws_secrets.core.secrets.collector import GENERIC_PREFIX, collect
from resolve_aws_secrets.core.secrets.indirection import resolve_indirection

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

_field = st.text(alphabet=string.ascii_lowercase + string.digits + "-", max_size=12)
_resource = st.text(alphabet=string.ascii_letters + string.digits + "/:_-", min_size=1, max_size=30)
_service = st.sampled_from(["secretsmanager", "ssm"])

_arns = st.builds(
    lambda partition, service, region, account, resource: f"arn:{partition}:{service}:{region}:{account}:{resource}",
    st.sampled_from(["aws", "aws-cn", "aws-us-gov"]),
    _service,
    _field,
    st.text(alphabet=string.digits, max_size=12),
    _resource,
)

_var_name = st.text(alphabet=string.ascii_uppercase + string.digits + "_", min_size=1, max_size=20)

_valid_retry = st.builds(
    RetryConfig,
    max_attempts=st.integers(min_value=1, max_value=20),
    initial_delay_seconds=st.floats(min_value=0.001, max_value=5.0),
    max_delay_seconds=st.floats(min_value=5.0, max_value=120.0),
    backoff_multiplier=st.floats(min_value=1.0, max_value=5.0),
)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class TestClassifyProperties:
    @given(raw=st.text())
    def test_never_fails_and_preserves_value(self, raw: str) -> None:
        reference = classify(raw)
        assert reference.value == raw

    @given(raw=st.text())
    def test_non_arn_is_name(self, raw: str) -> None:
        assume(not raw.startswith("arn:"))
        assert classify(raw).kind is ReferenceKind.NAME

    @given(arn=_arns)
    def test_well_formed_arn_classified_by_service(self, arn: str) -> None:
        service = arn.split(":")[2]
        expected = ReferenceKind.SECRET_STORE_ARN if service == "secretsmanager" else ReferenceKind.PARAMETER_STORE_ARN
        assert classify(arn).kind is expected

    @given(service=_field, rest=st.lists(_field, min_size=3, max_size=5))
    def test_unknown_service_is_name(self, service: str, rest: list[str]) -> None:
        assume(service not in {"secretsmanager", "ssm"})
        raw = ":".join(["arn", "aws", service, *rest])
        assert classify(raw).kind is ReferenceKind.NAME

    @given(segments=st.lists(_field, max_size=2), service=_service)
    def test_too_few_segments_is_name(self, segments: list[str], service: str) -> None:
        raw = ":".join(["arn", "aws", service, *segments])
        assert classify(raw).kind is ReferenceKind.NAME


class TestRegionOfProperties:
    @given(region=_field, service=_service, resource=_resource)
    def test_extracts_region_field(self, region: str, service: str, resource: str) -> None:
        assert region_of(f"arn:aws:{service}:{region}:123456789012:{resource}") == region

    @given(raw=st.text())
    def test_none_iff_too_few_fields(self, raw: str) -> None:
        result = region_of(raw)
        if raw.count(":") < 3:
            assert result is None
        else:
            assert result == raw.split(":")[3]


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


class TestCollectProperties:
    @given(environment=st.dictionaries(_var_name, st.text(min_size=1, max_size=20), max_size=15))
    @settings(max_examples=100)
    def test_only_prefixed_variables_are_collected(self, environment: dict[str, str]) -> None:
        pending = collect(environment)

        direct = [fetch for fetch in pending if not fetch.indirect]
        eligible = [key for key in environment if key.startswith(GENERIC_PREFIX)]
        assert len(direct) <= len(eligible)
        assert all(fetch.output_key for fetch in direct)
        assert all(not fetch.indirect for fetch in pending[: len(direct)])

    @given(names=st.lists(_var_name, min_size=1, max_size=10, unique=True))
    def test_generic_prefix_keeps_environment_order(self, names: list[str]) -> None:
        assume(not any(name.startswith(("ARN_", "NAME_")) for name in names))
        environment = {f"SECRET_{name}": f"value-{name}" for name in names}

        assert [fetch.output_key for fetch in collect(environment)] == names


# ---------------------------------------------------------------------------
# Indirection documents
# ---------------------------------------------------------------------------


_json_values = st.one_of(
    st.text(max_size=10),
    st.integers(),
    st.booleans(),
    st.none(),
    st.lists(st.integers(), max_size=3),
)


class TestIndirectionProperties:
    @given(raw=st.text(max_size=50))
    def test_arbitrary_text_never_raises(self, raw: str) -> None:
        assert isinstance(resolve_indirection(raw), list)

    @given(document=st.dictionaries(st.text(max_size=15), _json_values, max_size=10))
    def test_keys_map_back_to_document(self, document: dict[str, object]) -> None:
        pending = resolve_indirection(json.dumps(document))

        string_entries = {key for key, value in document.items() if isinstance(value, str)}
        assert len(pending) <= len(string_entries)
        for fetch in pending:
            assert fetch.output_key
            assert not fetch.indirect
            assert fetch.output_key in string_entries or GENERIC_PREFIX + fetch.output_key in string_entries


# ---------------------------------------------------------------------------
# Resolved environment
# ---------------------------------------------------------------------------


class TestResolvedEnvProperties:
    @given(entries=st.lists(st.tuples(_var_name, st.text(max_size=10)), max_size=20))
    def test_matches_dict_semantics(self, entries: list[tuple[str, str]]) -> None:
        resolved = ResolvedEnv(entries)
        expected = dict(entries)

        assert dict(resolved) == expected
        assert list(resolved) == list(expected)

    @given(
        entries=st.lists(
            st.tuples(_var_name, st.text(alphabet=string.ascii_lowercase, min_size=4, max_size=10)),
            min_size=1,
            max_size=5,
        )
    )
    def test_repr_never_leaks_values(self, entries: list[tuple[str, str]]) -> None:
        rendered = repr(ResolvedEnv(entries))
        for _key, value in entries:
            assume(value not in "ResolvedEnv")
            assert value not in rendered


# ---------------------------------------------------------------------------
# Retry backoff
# ---------------------------------------------------------------------------


class TestRetryProperties:
    @given(config=_valid_retry, attempt=st.integers(min_value=0, max_value=30))
    def test_delay_bounded_by_max(self, config: RetryConfig, attempt: int) -> None:
        executor = RetryExecutor(config, jitter_factor=0.0)
        delay = executor.calculate_delay(attempt)

        assert 0 < delay <= config.max_delay_seconds

    @given(config=_valid_retry, attempt=st.integers(min_value=0, max_value=10))
    def test_delay_non_decreasing(self, config: RetryConfig, attempt: int) -> None:
        executor = RetryExecutor(config, jitter_factor=0.0)

        assert executor.calculate_delay(attempt) <= executor.calculate_delay(attempt + 1)
