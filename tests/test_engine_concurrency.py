from concurrent.futures import ThreadPoolExecutor

from mockledger.core import MockEngine, VerifyCount


def test_each_response_is_handed_out_once_across_threads() -> None:
    engine = MockEngine()
    engine.returns("createTask", *range(200))

    def worker(i: int) -> int:
        return engine.call("createTask", {"worker": i})

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(worker, range(200)))

    assert sorted(results) == list(range(200))
    indices = [call.sequence_index for call in engine.recorder.all_calls()]
    assert indices == sorted(set(indices))
    engine.verify("createTask", VerifyCount.exact(200))
    engine.verify_all_stubs_consumed()
