from concurrent.futures import ThreadPoolExecutor

import pytest
from crand import Engine32, Engine64, UniformInt64, spawn_engines


def test_spawn_engines_assigns_consecutive_sequence_ids() -> None:
    engines = spawn_engines(42, 4, first_seq=10)
    assert [engine.inc for engine in engines] == [(seq << 1) | 1 for seq in range(10, 14)]
    assert engines[0] == Engine64.with_seq(42, 10)


def test_spawned_streams_differ() -> None:
    engines = spawn_engines(7, 8, engine=Engine32)
    assert all(isinstance(engine, Engine32) for engine in engines)
    firsts = [tuple(engine.next_u32() for _ in range(4)) for engine in engines]
    assert len(set(firsts)) == 8


def test_parallel_consumers_each_own_an_engine() -> None:
    spec = UniformInt64.init(1, 1000)

    def consume(engine: Engine64) -> list[int]:
        return [spec.sample(engine) for _ in range(2000)]

    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = list(pool.map(consume, spawn_engines(2024, 4)))

    serial = [consume(engine) for engine in spawn_engines(2024, 4)]
    assert parallel == serial
    assert len({tuple(values) for values in parallel}) == 4


def test_zero_count_and_negative_count() -> None:
    assert spawn_engines(1, 0) == []
    with pytest.raises(ValueError):
        spawn_engines(1, -1)
