import pytest

from mockledger.core import NEVER, UnconsumedStubsError, VerifyCount
from tests.harness.task_service import NetworkError, Task, TaskImporter, TaskServiceMock


def test_import_skips_existing_and_collects_failures() -> None:
    service = TaskServiceMock()
    service.register_get_tasks([Task("0", "existing")])
    service.register_create_task(Task("1", "new"), NetworkError("flaky"))

    created, failed = TaskImporter(service).import_titles(["existing", "new", "retry me"])

    assert created == [Task("1", "new")]
    assert failed == ["retry me"]
    service.verify_get_tasks()
    result = service.verify_create_task(VerifyCount.exact(2))
    assert result.all_parameters() == [
        {"title": "new", "due": None},
        {"title": "retry me", "due": None},
    ]
    service.verify_delete_task(NEVER)
    service.verify_no_more_interactions()
    service.verify_all_stubs_consumed()


def test_import_with_nothing_new_leaves_stubs_unused() -> None:
    service = TaskServiceMock()
    service.register_get_tasks([Task("0", "existing")])
    service.register_create_task(Task("1", "unused"))

    created, failed = TaskImporter(service).import_titles(["existing"])

    assert created == [] and failed == []
    service.verify_get_tasks()
    service.verify_create_task(NEVER)
    service.verify_no_more_interactions()
    with pytest.raises(UnconsumedStubsError):
        service.verify_all_stubs_consumed()
