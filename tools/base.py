"""
Abstract tool contract shared by every service integration.

A tool is built once per process with fixed credentials and, optionally, a set
of *predefined parameters*: field values pinned at construction time so the
LLM never has to (and never can) choose them. The schema handed to agent
frameworks is the tool's input schema minus those pinned fields.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, Mapping, Sequence, Tuple, TypeVar

from pydantic import ValidationError

from tools.exceptions import ServiceError, ToolConstructionError, ToolInputError
from tools.schema import ToolSchema
from utils.logger import get_logger

if TYPE_CHECKING:
    from langchain_core.tools import StructuredTool
    from tools.adapters import RuntimeConfig, StepTool

logger = get_logger(__name__)

A = TypeVar("A")
R = TypeVar("R")


class ToolBase(ABC, Generic[A, R]):
    """Identity, schema partitioning and adapter export for a single service operation.

    Concrete tools fix ``name``, ``description``, ``parameters`` and ``service``
    and take ``auth`` plus optional ``predefined_parameters`` from their caller.
    """

    def __init__(
        self,
        *,
        name: str,
        description: str,
        parameters: ToolSchema,
        service: str,
        auth: A,
        predefined_parameters: Mapping[str, Any] | None = None,
    ) -> None:
        if not name:
            raise ValueError("Tool name must be a non-empty string")
        if not description:
            raise ValueError(f"Tool '{name}' needs a non-empty description")

        self._name = name
        self._description = description
        self._service = service
        self._auth = auth
        self._input_schema = parameters
        self._predefined_parameters: Mapping[str, Any] | None = None

        if predefined_parameters:
            try:
                parameters.validate_partial(predefined_parameters)
            except ValidationError as exc:
                raise ToolConstructionError(
                    f"invalid predefined parameters: {exc}",
                    tool_name=name,
                    errors=exc.errors(include_url=False),
                ) from exc
            self._predefined_parameters = MappingProxyType(dict(predefined_parameters))
            parameters = parameters.omit(predefined_parameters.keys())

        self._parameters = parameters

        logger.debug("tool_parameters", tool=name, parameters=parameters.to_json_schema())
        logger.debug(
            "tool_predefined_parameters",
            tool=name,
            keys=sorted(self._predefined_parameters or {}),
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def parameters(self) -> ToolSchema:
        """The exposed schema: input schema without the predefined fields."""
        return self._parameters

    @property
    def input_schema(self) -> ToolSchema:
        """The full input schema, predefined fields included."""
        return self._input_schema

    @property
    def service(self) -> str:
        return self._service

    @property
    def auth(self) -> A:
        return self._auth

    @abstractmethod
    async def execute(self, input: Mapping[str, Any], config: RuntimeConfig) -> R:
        """Run the service operation.

        ``input`` already holds the predefined parameters merged with the
        caller's values. Implementations must not mutate it and must turn every
        upstream failure into a descriptive ``ServiceError``.
        """
        raise NotImplementedError

    def get_predefined_parameters(self) -> Mapping[str, Any] | None:
        """Return the pinned parameters (read-only), or ``None`` when there are none."""
        return self._predefined_parameters

    def get_auth(self) -> A:
        """Return the credentials, e.g. to build sibling tools sharing them."""
        return self._auth

    def get_tool_name(self) -> str:
        return self._name

    def get_tool_description(self) -> str:
        return self._description

    def langchain_tool(self) -> StructuredTool:
        """Return this tool as a LangChain ``StructuredTool``."""
        from tools.adapters import to_langchain_tool

        return to_langchain_tool(self)

    def step_tool(self) -> StepTool:
        """Return this tool as a ``{description, parameters, execute}`` step record."""
        from tools.adapters import to_step_tool

        return to_step_tool(self)

    def require(self, input: Mapping[str, Any], *keys: str) -> None:
        """Raise ``ToolInputError`` unless every key holds a non-empty value."""
        for key in keys:
            value = input.get(key)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ToolInputError(f"{key} is required", tool_name=self._name)

    def service_error(
        self,
        exc: ServiceError,
        known: Sequence[Tuple[str, str]],
        fallback: str,
    ) -> ServiceError:
        """Map an upstream failure to a readable ``ServiceError``.

        ``known`` pairs an upstream error signature with the message to report;
        the first signature found in the upstream message wins. Anything else
        is reported as ``"<fallback>: <upstream message>"``.
        """
        for signature, message in known:
            if signature in exc.message:
                break
        else:
            message = f"{fallback}: {exc.message}"
        return ServiceError(
            message,
            service=exc.service or self._service,
            status_code=exc.status_code,
            error_type=exc.error_type,
            tool_name=self._name,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r}, service={self._service!r})"
