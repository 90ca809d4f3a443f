from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple, Type, TypeVar, Union, overload

from mockledger.core.engine import MockEngine
from mockledger.core.errors import StubPayloadTypeError
from mockledger.core.types import StubResponse, VerificationResult, VerifyCount
from mockledger.report.report import InteractionReport
from mockledger.schemas.config import EngineConfig

T = TypeVar("T")

ReturnSpec = Union[type, Tuple[type, ...]]


class MockDouble:
    """Base class for hand-written test doubles.

    A subclass implements the collaborator protocol method by method and
    forwards each one to :meth:`_call` under a method-name constant, passing
    the collaborator's arguments as one mapping, e.g.::

        class TaskServiceMock(MockDouble, TaskService):
            CREATE_TASK = "create_task"

            def create_task(self, title: str) -> Task:
                return self._call(self.CREATE_TASK, {"title": title}, returns=Task)

    ``returns`` is handed to ``isinstance``, so a registered ``None`` payload
    fails a plain ``returns=Task``. Methods returning ``Optional[Task]`` pass
    ``returns=(Task, type(None))``.

    Typed ``register_*``/``verify_*`` wrappers on the subclass go through
    :meth:`_register` and :meth:`_verify`.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        if config is None:
            config = EngineConfig(name=type(self).__name__)
        self.engine = MockEngine(config)

    @overload
    def _call(
        self, method_name: str, parameters: Optional[Mapping[str, Any]] = None, /, *, returns: Type[T]
    ) -> T: ...

    @overload
    def _call(
        self,
        method_name: str,
        parameters: Optional[Mapping[str, Any]] = None,
        /,
        *,
        returns: Union[Tuple[type, ...], None] = None,
    ) -> Any: ...

    def _call(
        self,
        method_name: str,
        parameters: Optional[Mapping[str, Any]] = None,
        /,
        *,
        returns: Optional[ReturnSpec] = None,
    ) -> Any:
        payload = self.engine.call(method_name, parameters)
        if returns is not None and self.engine.config.check_payload_types:
            if not isinstance(payload, returns):
                raise StubPayloadTypeError(method_name, returns, payload)
        return payload

    async def _call_async(
        self,
        method_name: str,
        parameters: Optional[Mapping[str, Any]] = None,
        /,
        *,
        returns: Optional[ReturnSpec] = None,
    ) -> Any:
        # the engine answers synchronously; awaiting only changes how the outcome is delivered
        return self._call(method_name, parameters, returns=returns)

    def _register(self, method_name: str, *responses: Any) -> None:
        self.engine.register(method_name, [_as_response(method_name, r) for r in responses])

    def _verify(self, method_name: str, called: VerifyCount = VerifyCount.exact(1)) -> VerificationResult:
        return self.engine.verify(method_name, called)

    def param_captured(self, method_name: str) -> List[Mapping[str, Any]]:
        return self.engine.param_captured(method_name)

    def verify_no_more_interactions(self) -> None:
        self.engine.verify_no_more_interactions()

    def verify_all_stubs_consumed(self) -> None:
        self.engine.verify_all_stubs_consumed()

    def report(self) -> InteractionReport:
        return self.engine.report()


def _as_response(method_name: str, response: Any) -> StubResponse:
    if isinstance(response, StubResponse):
        return response
    if isinstance(response, BaseException):
        return StubResponse.error(method_name, response)
    return StubResponse.value(method_name, response)
