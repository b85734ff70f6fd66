"""End-to-end tests: realistic operations exercising every primitive."""

from __future__ import annotations

import pytest

from opflow import Err, Error, Ok, Operation, State
from opflow.controllers import when


# ---------------------------------------------------------------------------
# Age check: assignment followed by a validating step
# ---------------------------------------------------------------------------


class CheckAge(Operation):
    @staticmethod
    def process(p):
        p.set("age", lambda s: s["input"]["age"])
        p.step("check_adult")
        p.set(lambda s: s["age"])

    def check_adult(self, state):
        if state["age"] < 18:
            return self.error("underage")


class CheckAgeAtAge(CheckAge):
    result_key = "age"

    @staticmethod
    def process(p):
        p.set("age", lambda s: s["input"]["age"])
        p.step("check_adult")


@pytest.mark.integration
class TestAgeCheck:
    def test_underage(self):
        result = CheckAge().call({"age": 15})
        assert result.is_err
        assert result.error.kind == "underage"

    def test_adult(self):
        assert CheckAge().call({"age": 20}) == Ok(20)

    def test_result_key_override(self):
        assert CheckAgeAtAge().call({"age": 20}) == Ok(20)
        assert CheckAgeAtAge().call({"age": 15}).error.kind == "underage"


# ---------------------------------------------------------------------------
# Replacement step wins over an earlier assignment
# ---------------------------------------------------------------------------


class Replace(Operation):
    result_key = "result"

    @staticmethod
    def process(p):
        p.set(lambda s: "a")
        p.map(lambda s: Ok(State({"result": "x"})))


@pytest.mark.integration
def test_replacement_wins():
    assert Replace().call() == Ok("x")


# ---------------------------------------------------------------------------
# Conditional sub-sequence
# ---------------------------------------------------------------------------


class Discount(Operation):
    @staticmethod
    def process(p):
        p.set("flag", lambda s: s["input"]["flag"])
        p.set("price", lambda s: 100)
        with p.sequence(when("flag")) as discounted:
            discounted.set("price", lambda s: s["price"] - 10)
            discounted.step("audit")
        p.set(lambda s: s["price"])

    audit_calls = 0

    def audit(self, state):
        type(self).audit_calls += 1


@pytest.mark.integration
class TestConditionalSequence:
    def test_flag_false_skips_nested(self):
        Discount.audit_calls = 0
        assert Discount().call({"flag": False}) == Ok(100)
        assert Discount.audit_calls == 0

    def test_flag_true_runs_nested_once(self):
        Discount.audit_calls = 0
        assert Discount().call({"flag": True}) == Ok(90)
        assert Discount.audit_calls == 1


# ---------------------------------------------------------------------------
# Short-circuit at step k
# ---------------------------------------------------------------------------


@pytest.mark.integration
@pytest.mark.parametrize("k", [0, 1, 2, 3])
def test_failure_at_step_k_skips_the_rest(k, make_recorder):
    failure = Err(Error(kind="stop", details=k))
    recorders = [make_recorder() for _ in range(4)]

    def body(i):
        def run(state):
            recorders[i](state)
            return failure if i == k else i

        return run

    class Chain(Operation):
        @staticmethod
        def process(p):
            for i in range(4):
                p.set(f"s{i}", body(i))

    result = Chain().call()
    assert result is failure
    assert [r.count for r in recorders] == [1] * (k + 1) + [0] * (3 - k)


@pytest.mark.integration
def test_all_steps_succeed_projects_final_value():
    class Many(Operation):
        @staticmethod
        def process(p):
            for i in range(10):
                p.step(lambda s: None)
            p.set(lambda s: "final")

    assert Many().call() == Ok("final")


@pytest.mark.integration
def test_definition_reused_across_calls():
    op = CheckAge()
    assert [op.call({"age": a}).is_ok for a in (20, 10, 30)] == [True, False, True]
