"""Register a few users through an opflow operation and print the outcome.

Reads ``OPFLOW_*`` settings from the environment or a local ``.env``.
"""

import logging
import os

from dotenv import load_dotenv

from opflow import FlowConfig, Operation, configure, respond
from opflow.controllers import when

load_dotenv()
configure(FlowConfig.from_env())
logging.basicConfig(
    level=os.environ.get("OPFLOW_DEMO_LOG_LEVEL", "INFO"),
    format="%(levelname)s %(name)s: %(message)s",
)

# ---------------------------------------------------------------------------
# Define the operation; steps are declared once, when the class is created
# ---------------------------------------------------------------------------


class RegisterUser(Operation.with_plugins("scope")):
    scope = ("users",)
    result_key = "user"

    @staticmethod
    def process(p):
        p.set("params", "validate")
        p.step("ensure_unique")
        with p.sequence(when(lambda s: s["params"].get("newsletter"))) as opt_in:
            opt_in.set("subscribed", lambda s: True)
        p.set("build_user")
        p.step("persist")

    def validate(self, state):
        params = state["input"] or {}
        if "@" not in params.get("email", ""):
            return self.error("invalid", "email is required", {"field": "email"})
        return params

    def ensure_unique(self, state):
        if state["params"]["email"] in self.users:
            return self.error("conflict", "email already registered")

    def build_user(self, state):
        return {
            "email": state["params"]["email"],
            "newsletter": state.get("subscribed", False),
        }

    def persist(self, state):
        self.users[state["user"]["email"]] = state["user"]


# ---------------------------------------------------------------------------
# Run it
# ---------------------------------------------------------------------------

users: dict = {}
register = RegisterUser(users=users)

for params in (
    {"email": "ann@example.com", "newsletter": True},
    {"email": "ann@example.com"},
    {"email": "nope"},
    {"email": "bob@example.com"},
):
    line = respond(
        register.call(params),
        on_success=lambda user: f"created {user}",
        on_failure={"conflict": lambda e: f"409 {e.message}"},
        otherwise=lambda e: f"422 {e.to_dict()}",
    )
    print(f"  {params!r:50} -> {line}")

print(f"\n{len(users)} user(s) stored")
