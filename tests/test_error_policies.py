"""
Tests for member read error policies.

Field failures abort by default, accessor failures drop the member by
default; both are configurable.
"""

import logging

import pytest

from objectvisitor import (
    ABSENT,
    CollectErrorsPolicy,
    ContinueOnErrorsPolicy,
    EventCollector,
    FailFastPolicy,
    MemberAccessError,
    ObjectTraverser,
    ThresholdPolicy,
    VisitorConfig,
    collect_events,
)


class Exploding:
    """Object whose 'boom' field cannot be read."""

    def __init__(self):
        self.fine = 1
        self.boom = 2

    def __getattribute__(self, name):
        if name == 'boom':
            raise RuntimeError("boom")
        return object.__getattribute__(self, name)


class BrokenProperty:

    def __init__(self):
        self.fine = 1

    @property
    def broken(self):
        raise ValueError("not computable")

    @property
    def working(self):
        return "ok"


def keys(events):
    return [e[1] for e in events if e[0] == "key"]


class TestAbsent:

    def test_singleton(self):
        assert ABSENT is type(ABSENT)()

    def test_falsy_and_repr(self):
        assert not ABSENT
        assert repr(ABSENT) == 'ABSENT'


class TestFieldFailures:

    def test_fail_fast_by_default(self):
        with pytest.raises(MemberAccessError) as exc_info:
            collect_events(Exploding())
        assert exc_info.value.member == 'boom'
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_context_restored_after_abort(self):
        traverser = ObjectTraverser(EventCollector())
        with pytest.raises(MemberAccessError):
            traverser.traverse({"nested": Exploding()})
        assert traverser.nesting_level == 0
        assert traverser.context.ancestors == []
        assert not traverser.context.active

    def test_continue_drops_field(self):
        policy = CollectErrorsPolicy()
        events = collect_events(Exploding(), field_error_policy=policy)
        assert keys(events) == ["fine"]
        assert len(policy.errors) == 1
        assert policy.errors[0]['member'] == 'boom'


class TestAccessorFailures:

    def test_dropped_and_logged_by_default(self, caplog):
        with caplog.at_level(logging.WARNING, logger="objectvisitor"):
            events = collect_events(BrokenProperty(), getters_included=True)
        assert keys(events) == ["fine", "working"]
        assert "broken" in caplog.text
        assert "not computable" in caplog.text

    def test_strict_config_aborts(self):
        with pytest.raises(MemberAccessError) as exc_info:
            collect_events(BrokenProperty(), config=VisitorConfig.strict(),
                           getters_included=True)
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestPolicies:

    def test_fail_fast_chains_cause(self):
        policy = FailFastPolicy()
        with pytest.raises(MemberAccessError, match="'boom' of Exploding"):
            collect_events(Exploding(), field_error_policy=policy)

    def test_continue_statistics(self):
        policy = ContinueOnErrorsPolicy(verbose=False)
        collect_events([BrokenProperty(), BrokenProperty()],
                       getters_included=True, accessor_error_policy=policy)
        stats = policy.get_statistics()
        assert stats['total_errors'] == 2
        assert stats['by_type'] == {'ValueError': 2}

    def test_collect_does_not_log(self, caplog):
        with caplog.at_level(logging.WARNING, logger="objectvisitor"):
            collect_events(BrokenProperty(), getters_included=True,
                           accessor_error_policy=CollectErrorsPolicy())
        assert caplog.records == []

    def test_threshold_tolerates_then_aborts(self):
        policy = ThresholdPolicy(max_errors=1, verbose=False)
        values = [BrokenProperty(), BrokenProperty()]
        with pytest.raises(MemberAccessError):
            collect_events(values, getters_included=True, accessor_error_policy=policy)
        assert policy.error_count == 2

    def test_threshold_under_limit(self):
        policy = ThresholdPolicy(max_errors=5, verbose=False)
        events = collect_events(BrokenProperty(), getters_included=True,
                                accessor_error_policy=policy)
        assert keys(events) == ["fine", "working"]
        assert policy.error_count == 1


class TestPolicyReuse:
    """One traverser reused sequentially starts every traversal clean."""

    def make_traverser(self, policy):
        config = VisitorConfig(getters_included=True, accessor_error_policy=policy)
        return ObjectTraverser(EventCollector(), config)

    def test_threshold_counts_per_traversal(self):
        policy = ThresholdPolicy(max_errors=1, verbose=False)
        traverser = self.make_traverser(policy)
        traverser.traverse(BrokenProperty())
        traverser.traverse(BrokenProperty())
        assert policy.error_count == 1

    def test_records_cleared_between_traversals(self):
        policy = CollectErrorsPolicy()
        traverser = self.make_traverser(policy)
        traverser.traverse(BrokenProperty())
        first = policy.errors
        traverser.traverse(BrokenProperty())
        assert len(policy.errors) == 1
        assert len(first) == 1
        assert policy.get_statistics()['total_errors'] == 1

    def test_shared_policy_across_calls(self):
        policy = ThresholdPolicy(max_errors=1, verbose=False)
        for _ in range(3):
            events = collect_events(BrokenProperty(), getters_included=True,
                                    accessor_error_policy=policy)
            assert keys(events) == ["fine", "working"]

    def test_reset_is_a_no_op_by_default(self):
        policy = FailFastPolicy()
        policy.reset()
        with pytest.raises(MemberAccessError):
            collect_events(Exploding(), field_error_policy=policy)
