import asyncio

import pytest

from izzy.pipeline.op import Sequential, map, passthrough, then
from izzy.pipeline.parallel import Parallel, parallel, try_parallel


def _fail(x):
    raise ValueError(f"{x} is the number!")


@pytest.mark.asyncio
async def test_parallel():
    pipeline = Parallel(map(lambda x: x + 1), map(lambda x: x * 3))
    assert await pipeline.call(1) == (2, 3)


@pytest.mark.asyncio
async def test_parallel_nested():
    op1 = map(lambda x: x + 1)
    op2 = map(lambda x: x * 3)
    op3 = map(lambda x: f"{x} is the number!")
    op4 = map(lambda x: x - 1)
    pipeline = Parallel(Parallel(Parallel(op1, op2), op3), op4)
    assert await pipeline.call(1) == (((2, 3), "1 is the number!"), 0)


@pytest.mark.asyncio
async def test_parallel_nested_rev():
    op1 = map(lambda x: x + 1)
    op2 = map(lambda x: x * 3)
    op3 = map(lambda x: f"{x} is the number!")
    op4 = map(lambda x: x == 1)
    pipeline = Parallel(op1, Parallel(op2, Parallel(op3, op4)))
    assert await pipeline.call(1) == (2, (3, ("1 is the number!", True)))


@pytest.mark.asyncio
async def test_sequential_and_parallel():
    op1 = map(lambda x: x + 1)
    op2 = map(lambda x: x * 2)
    op3 = map(lambda x: x * 3)
    op4 = map(lambda pair: pair[0] + pair[1])
    pipeline = Sequential(Sequential(op1, Parallel(op2, op3)), op4)
    assert await pipeline.call(1) == 10


@pytest.mark.asyncio
async def test_parallel_chain_flattened():
    pipeline = Parallel(
        map(lambda x: x + 1),
        Parallel(
            map(lambda x: x * 3),
            Parallel(map(lambda x: f"{x} is the number!"), map(lambda x: x == 1)),
        ),
    ).map(lambda r: (r[0], r[1][0], r[1][1][0], r[1][1][1]))
    assert await pipeline.call(1) == (2, 3, "1 is the number!", True)


@pytest.mark.asyncio
async def test_parallel_pass_through():
    async def run(x):
        op = Parallel(Parallel(passthrough(), passthrough()), passthrough())
        (r1, r2), r3 = await op.call(x)
        return (r1, r2, r3)

    pipeline = then(run)
    assert await pipeline.call(1) == (1, 1, 1)


@pytest.mark.asyncio
async def test_parallel_macro():
    op2 = map(lambda x: x * 2)
    pipeline = parallel(
        passthrough(),
        op2,
        map(lambda x: f"{x} is the number!"),
        map(lambda x: x == 1),
    )
    assert await pipeline.call(1) == (1, 2, "1 is the number!", True)


@pytest.mark.asyncio
async def test_parallel_two_ops_flat():
    pipeline = parallel(map(lambda x: x + 1), map(lambda x: x - 1))
    assert await pipeline.call(1) == (2, 0)


def test_parallel_needs_two_ops():
    with pytest.raises(ValueError):
        parallel(passthrough())


@pytest.mark.asyncio
async def test_try_parallel_chain_error():
    pipeline = Parallel(
        map(lambda x: x + 1),
        Parallel(
            map(lambda x: x * 3),
            Parallel(map(_fail), map(lambda x: x == 1)),
        ),
    ).map_ok(lambda r: (r[0], r[1][0], r[1][1][0], r[1][1][1]))
    with pytest.raises(ValueError, match="1 is the number!"):
        await pipeline.call(1)


@pytest.mark.asyncio
async def test_try_parallel_macro_ok():
    op2 = map(lambda x: x * 2)
    pipeline = try_parallel(
        map(lambda x: x),
        op2,
        map(lambda x: f"{x} is the number!"),
        map(lambda x: x == 1),
    )
    assert await pipeline.try_call(1) == (1, 2, "1 is the number!", True)


@pytest.mark.asyncio
async def test_try_parallel_macro_err():
    op2 = map(lambda x: x * 2)
    pipeline = try_parallel(
        map(lambda x: x),
        op2,
        map(_fail),
        map(lambda x: x == 1),
    )
    with pytest.raises(ValueError, match="1 is the number!"):
        await pipeline.try_call(1)


@pytest.mark.asyncio
async def test_parallel_runs_concurrently():
    event = asyncio.Event()

    async def waiter(x):
        await event.wait()
        return x

    async def setter(x):
        event.set()
        return x * 10

    pipeline = Parallel(then(waiter), then(setter))
    result = await asyncio.wait_for(pipeline.call(2), timeout=1)
    assert result == (2, 20)


@pytest.mark.asyncio
async def test_parallel_failure_cancels_other():
    started = asyncio.Event()
    cancelled = []

    async def slow(x):
        started.set()
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise
        return x

    async def failing(x):
        await started.wait()
        raise RuntimeError("boom")

    pipeline = Parallel(then(slow), then(failing))
    with pytest.raises(RuntimeError, match="boom"):
        await asyncio.wait_for(pipeline.try_call(1), timeout=1)
    await asyncio.sleep(0)
    assert cancelled == [True]