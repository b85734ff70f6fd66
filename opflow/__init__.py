"""Operation engine: compose business steps into one short-circuiting call.

Public surface::

    from opflow import (
        Operation,
        Builder,
        State,
        Result,
        Ok,
        Err,
        Error,
        success,
        failure,
        wrap,
        error,
        wrap_if_present,
        FlowConfig,
        configure,
    )
"""

from . import controllers
from .config import FlowConfig, configure, get_config
from .dsl import Builder, Executor, ProcessDefinition, StepKind, StepSpec
from .error import Error
from .errors import (
    OperationDefinitionError,
    OpflowError,
    PluginError,
    ResultAccessError,
    ScopeError,
    UnhandledFailureError,
)
from .operation import Operation, error, wrap_if_present
from .plugins import available_plugins, register_plugin
from .plugins.responder import respond
from .protocol import Continuation, Controller, StepCallable
from .result import Err, Ok, Result, failure, success, wrap
from .state import State

__all__ = [
    "Operation",
    "Builder",
    "Executor",
    "ProcessDefinition",
    "StepKind",
    "StepSpec",
    "State",
    "Result",
    "Ok",
    "Err",
    "Error",
    "success",
    "failure",
    "wrap",
    "error",
    "wrap_if_present",
    "respond",
    "controllers",
    "Continuation",
    "Controller",
    "StepCallable",
    "FlowConfig",
    "configure",
    "get_config",
    "available_plugins",
    "register_plugin",
    "OpflowError",
    "OperationDefinitionError",
    "PluginError",
    "ResultAccessError",
    "ScopeError",
    "UnhandledFailureError",
]
