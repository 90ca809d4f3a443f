"""Sample collaborator and its hand-written double, used across the suite."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from mockledger.core.types import VerificationResult, VerifyCount
from mockledger.doubles import MockDouble


class NetworkError(RuntimeError):
    pass


@dataclass(frozen=True)
class Task:
    task_id: str
    title: str
    done: bool = False


class TaskService(Protocol):
    def create_task(self, title: str, due: Optional[str] = None) -> Task: ...
    def get_tasks(self) -> List[Task]: ...
    def delete_task(self, task_id: str) -> None: ...
    def find_task(self, title: str, returns: str = "first") -> Optional[Task]: ...
    async def fetch_task(self, task_id: str) -> Task: ...


class TaskServiceMock(MockDouble):
    CREATE_TASK = "createTask"
    GET_TASKS = "getTasks"
    DELETE_TASK = "deleteTask"
    FETCH_TASK = "fetchTask"
    FIND_TASK = "findTask"

    def create_task(self, title: str, due: Optional[str] = None) -> Task:
        return self._call(self.CREATE_TASK, {"title": title, "due": due}, returns=Task)

    def get_tasks(self) -> List[Task]:
        return self._call(self.GET_TASKS, returns=list)

    def delete_task(self, task_id: str) -> None:
        self._call(self.DELETE_TASK, {"task_id": task_id})

    def find_task(self, title: str, returns: str = "first") -> Optional[Task]:
        return self._call(self.FIND_TASK, {"title": title, "returns": returns}, returns=(Task, type(None)))

    async def fetch_task(self, task_id: str) -> Task:
        return await self._call_async(self.FETCH_TASK, {"task_id": task_id}, returns=Task)

    def register_create_task(self, *responses: object) -> None:
        self._register(self.CREATE_TASK, *responses)

    def register_get_tasks(self, *responses: object) -> None:
        self._register(self.GET_TASKS, *responses)

    def register_delete_task(self, *responses: object) -> None:
        self._register(self.DELETE_TASK, *responses)

    def register_find_task(self, *responses: object) -> None:
        self._register(self.FIND_TASK, *responses)

    def register_fetch_task(self, *responses: object) -> None:
        self._register(self.FETCH_TASK, *responses)

    def verify_create_task(self, called: VerifyCount = VerifyCount.exact(1)) -> VerificationResult:
        return self._verify(self.CREATE_TASK, called)

    def verify_get_tasks(self, called: VerifyCount = VerifyCount.exact(1)) -> VerificationResult:
        return self._verify(self.GET_TASKS, called)

    def verify_delete_task(self, called: VerifyCount = VerifyCount.exact(1)) -> VerificationResult:
        return self._verify(self.DELETE_TASK, called)

    def verify_find_task(self, called: VerifyCount = VerifyCount.exact(1)) -> VerificationResult:
        return self._verify(self.FIND_TASK, called)

    def verify_fetch_task(self, called: VerifyCount = VerifyCount.exact(1)) -> VerificationResult:
        return self._verify(self.FETCH_TASK, called)


class TaskImporter:
    """Business logic under test: copies titles into a TaskService."""

    def __init__(self, service: TaskService):
        self.service = service

    def import_titles(self, titles: List[str]) -> Tuple[List[Task], List[str]]:
        created: List[Task] = []
        failed: List[str] = []
        existing = {task.title for task in self.service.get_tasks()}
        for title in titles:
            if title in existing:
                continue
            try:
                created.append(self.service.create_task(title))
            except NetworkError:
                failed.append(title)
        return created, failed


__all__ = ["NetworkError", "Task", "TaskImporter", "TaskService", "TaskServiceMock"]
