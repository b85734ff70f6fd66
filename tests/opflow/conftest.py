"""Shared fixtures and reusable dummy step bodies for opflow tests.

Every step here is a plain callable on ``State``; operations are built
inside the tests that need them.
"""

from __future__ import annotations

import pytest

from opflow import Error, Err, FlowConfig, Ok, State, configure

# ---------------------------------------------------------------------------
# Reusable dummy step bodies
# ---------------------------------------------------------------------------


class Recorder:
    """Step body that records every state it receives.

    Returns *returns* (default ``None``) so it can act as a passing check,
    a failing check or a value producer.
    """

    def __init__(self, returns=None):
        self.returns = returns
        self.calls: list[dict] = []

    def __call__(self, state: State):
        self.calls.append(state.to_dict())
        return self.returns

    @property
    def count(self) -> int:
        return len(self.calls)


def input_field(name: str):
    """Step body reading ``state["input"][name]``."""

    def body(state: State):
        return state["input"][name]

    body.__qualname__ = f"input_field({name})"
    return body


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def default_config():
    """Each test starts from the default FlowConfig."""
    previous = configure(FlowConfig())
    yield
    configure(previous)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_recorder():
    return Recorder


@pytest.fixture
def invalid():
    """A failure value tests can compare by identity."""
    return Err(Error(kind="invalid", message="bad input"))


@pytest.fixture
def base_state():
    return State({"input": {"age": 20}}, result_key="value")


@pytest.fixture
def ok_state(base_state):
    return Ok(base_state)
