# izzy

Composable asynchronous pipelines. A pipeline is built from small operations
("ops"), each an `izzy.pipeline.op.Op` whose `async call(input)` takes one
input and returns one output. Ops are chained one after another, run side by
side, or used to query a vector index, prompt a model or extract structured
data. The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building a pipeline

```python
import asyncio
from izzy.pipeline import builder

pipeline = (
    builder.new()
    .map(lambda pair: pair[0] + pair[1])
    .map(lambda z: f"Result: {z}!")
)

print(asyncio.run(pipeline.call((1, 2))))  # Result: 3!
```

`builder.new()` returns a `PipelineBuilder`; its methods `map`, `then`,
`chain`, `lookup`, `prompt` and `extract` each return the first op of the
pipeline. Every op then offers the same kind of methods:

- `map(f)` applies a plain function to the output;
- `then(f)` awaits an async function on the output;
- `chain(op)` feeds the output to another op;
- `lookup(index, n)` and `prompt(model)` feed the output to the AI ops below.

The standalone constructors `map`, `then` and `passthrough` in
`izzy.pipeline.op` create single ops (`Map`, `Then`, `Passthrough`), and
`Sequential(prev, op)` joins two ops directly.

`batch_call(n, inputs)` runs an op over many inputs with at most `n` calls in
flight and returns the outputs in input order; a call that raises leaves its
exception in its place in the list. `n` below 1 raises `ValueError`.

## Running ops in parallel

`izzy.pipeline.parallel.parallel` feeds the same input to every op,
concurrently, and gathers the results into a flat tuple in the order given:

```python
from izzy.pipeline.op import map, passthrough
from izzy.pipeline.parallel import parallel

op = parallel(
    passthrough(),
    map(lambda x: x * 2),
    map(lambda x: f"{x} is the number!"),
)

asyncio.run(op.call(1))  # (1, 2, "1 is the number!")
```

`Parallel(op1, op2)` is the two-op building block and returns a pair;
`parallel(*ops)` nests it and flattens the outcome. At least two ops are
required, otherwise `ValueError` is raised. If any op raises, the others are
cancelled and the error propagates.

## Fallible ops

An op fails by raising an exception. `try_call(input)` runs an op and lets the
failure propagate. The combinators, also available as classes in
`izzy.pipeline.try_op`, say what happens on each branch:

- `map_ok(f)` (`MapOk`): apply `f` to the output on success;
- `map_err(f)` (`MapErr`): on failure, raise the exception `f` returns for the
  caught one; `f` must return an exception instance, else `TypeError`;
- `and_then(f)` (`AndThen`): on success, await `f` on the output;
- `or_else(f)` (`OrElse`): on failure, await `f` on the exception; its result
  becomes the output, and if it raises that error propagates;
- `chain_ok(op)` (`TrySequential`): on success, feed the output to `op`.

`try_parallel(*ops)` is `parallel` for fallible ops: the first failing op
fails the whole op. `try_batch_call(n, inputs)` works like `batch_call` but
raises the first failure and cancels the calls still pending.

## AI operations

`izzy.pipeline.agent_ops` provides:

- `lookup(index, n)` (`Lookup`): calls `index.top_n(query, n)` with the input
  as a string and returns the `(score, id, document)` tuples as a list;
- `prompt(model)` (`Prompt`): calls `model.prompt(text)` and returns the reply;
- `extract(extractor)` (`Extract`): calls `extractor.extract(text)` and returns
  its result.

```python
pipeline = (
    builder.new()
    .map(lambda name: f"Find funny nicknames for the following name: {name}!")
    .prompt(agent)
)
```

Any object with an async `prompt(text)` method serves as a model, any object
with an async `top_n(query, n)` method as an index, and any object with an
async `extract(text)` method as an extractor.

`builder.with_error(error_type)` creates a builder that records `error_type`
as the pipeline's intended error type; `builder.new()` records `ChainError`.
The recorded type is not used when running ops. `ChainError(kind, source)`
takes `"prompt"` or `"lookup"` as its kind and formats its message as
"Failed to prompt agent: …" or "Failed to lookup documents: …".

## OneOrMany

`izzy.one_or_many.OneOrMany` is a list that always holds at least one item.
Build it with `OneOrMany.one(item)`, `OneOrMany.many(items)` or
`OneOrMany.merge(groups)`; building one with no items raises `EmptyListError`
(a `ValueError`). It supports `first()`, `rest()` (a new list of the other
items), `push(item)`, `len()`, iteration, indexing and item assignment by
integer index, and equality with other instances.

## What is not included

The package contains no model clients, vector stores, embedding code or
extractors of its own: the AI ops work only with objects you supply that have
the methods described above.