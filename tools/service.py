"""Base for tools backed by a REST service client."""
from __future__ import annotations

from typing import Any, Callable, ClassVar, Mapping, Type, TypeVar

import httpx
from pydantic import BaseModel

from tools.base import ToolBase
from tools.http import ServiceClient, abort_signal_of
from tools.schema import ToolSchema

A = TypeVar("A", bound=BaseModel)
R = TypeVar("R")


class ServiceTool(ToolBase[A, R]):
    """A tool whose identity and input model are fixed per class.

    Subclasses only take ``auth`` and ``predefined_parameters`` from the caller
    (plus an optional httpx transport, used by tests to stub the service).
    """

    NAME: ClassVar[str]
    DESCRIPTION: ClassVar[str]
    INPUT_MODEL: ClassVar[Type[BaseModel]]
    SERVICE: ClassVar[str]
    AUTH_MODEL: ClassVar[Type[BaseModel]]
    CLIENT: ClassVar[Callable[..., ServiceClient]]

    def __init__(
        self,
        *,
        auth: A | Mapping[str, Any],
        predefined_parameters: Mapping[str, Any] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            name=self.NAME,
            description=self.DESCRIPTION,
            parameters=ToolSchema(self.INPUT_MODEL),
            service=self.SERVICE,
            auth=auth if isinstance(auth, self.AUTH_MODEL) else self.AUTH_MODEL.model_validate(auth),
            predefined_parameters=predefined_parameters,
        )
        self._transport = transport

    def client(self, config: Any = None) -> Any:
        """A fresh service client for one invocation."""
        return self.CLIENT(self.auth, transport=self._transport, abort_signal=abort_signal_of(config))
