# threadcraft

Building blocks for thread-based concurrency, written with the standard
library only: synchronisation primitives, thread-safe containers, parallel
algorithms that split work between threads, and several thread pools.

## What is inside

- `threadcraft.sync`
  - `SpinBarrier(count)` and `Barrier(count)`: reusable barriers; the first
    spins while yielding the CPU, the second waits on a condition variable.
  - `CountingBarrier(count)`: a spinning barrier whose participants can leave
    for good with `done_waiting()`, so later rounds expect one thread fewer.
  - `Latch(count)`: single use; waiting on a latch that has already been
    released raises `RuntimeError`.
  - `Semaphore(permissions=1)`: `acquire()`, `release()`, `available()`, and
    usable as a context manager.
  - `ThreadGuard(thread)` and `JoinThreads(threads)`: context managers that
    join started threads when the block is left, even on an exception.
  - A count below 1 raises `ValueError`.
- `threadcraft.queues`
  - `ThreadSafeQueue`: `push`, `try_pop` (returns `None` when empty),
    blocking `wait_and_pop`, `empty()` and `len()`.
  - `SequentialQueue` and `DummyNodeQueue`: linked-list queues for a single
    thread; `pop()` returns `None` when empty.
  - `FineGrainedQueue`: a dummy-node queue with separate head and tail locks,
    a non-blocking `pop()` and a blocking `wait_pop()`.
- `threadcraft.stacks`
  - `ThreadSafeStack`: `push`, `pop` (checks and removes in one locked step),
    `empty()` and `len()`.
  - `TrivialStack`: separate `top()` and `pop()` calls.
  - Both raise `EmptyStackError` (an `IndexError`) when empty.
- `threadcraft.hashtable`
  - `ParallelHashTable(array_size)`: a fixed-size linear-probing table that
    maps keys in 1..2**32-1 to values in the same range, with `set_item`,
    `get_item` (0 when absent), `item_count()` and `clear()`.
  - `integer_hash(h)`: the 32-bit mixing function the table uses.
- `threadcraft.matrix`
  - `Matrix(rows, columns)`: a zero-filled integer matrix with `set_value`,
    `get_value`, `set_all` and `format()`.
  - The static methods `multiply`, `parallel_multiply`, `transpose` and
    `parallel_transpose`. Multiplication *adds* `x @ y` into the result
    matrix.
  - Mismatched shapes raise `MatrixSizeError`.
- `threadcraft.sequences`
  - `sieve_of_eratosthenes(num)`: the primes up to and including `num`.
  - `get_next(start=0, step=1)`: an endless arithmetic generator.
- `threadcraft.search`
  - `parallel_find` and `parallel_find_async`: return the index of a match,
    or `None`.
  - `parallel_for_each` and `parallel_for_each_async`.
  - `parallel_accumulate(items, init)` and `recursive_accumulate(items)`.
- `threadcraft.scan`
  - `sequential_partial_sum`, `parallel_partial_sum` and
    `parallel_partial_sum_barrier`, which all return a new list of running
    totals.
- `threadcraft.sorting`
  - `sequential_quick_sort` and `parallel_quick_sort`. The parallel version
    sorts each upper partition on its own thread.
- `threadcraft.pools`
  - `SimpleThreadPool`: fire-and-forget tasks.
  - `WaitingThreadPool`: `submit` returns a `concurrent.futures.Future`;
    `run_pending_task` lets a waiting thread help out.
  - `WorkStealingThreadPool`, built on `WorkStealingQueue`: each worker has
    its own queue and idle workers steal from the others.
  - `Sorter`, `pool_quick_sort` and `pool_accumulate`: algorithms driven by
    these pools.
- `threadcraft.interruptible`
  - `InterruptibleThread(target)`: started at once. `interrupt()` sets its
    `InterruptFlag`. The target polls `interruption_point()`. `join()`
    re-raises any exception the target raised.
- `threadcraft.accounts`
  - `BankAccount(balance, name)` with `withdraw`, `deposit` and `balance()`.
  - `transfer(source, destination, amount)`: takes both locks in a fixed
    order, so opposite transfers cannot deadlock. Transferring to the same
    account raises `ValueError`.
- `threadcraft.timing`
  - `format_results` and `print_results`: report the elapsed time between
    two `time.perf_counter()` readings.
  - `hardware_threads()` and `thread_count(length, min_per_thread)`: the
    heuristic used to size work.

## Installation

```
pip install .
```

## Examples

Thread-safe containers:

```python
from threadcraft.queues import ThreadSafeQueue
from threadcraft.stacks import ThreadSafeStack, EmptyStackError

queue = ThreadSafeQueue()
queue.push(10)
value = queue.wait_and_pop()   # 10

stack = ThreadSafeStack()
stack.push("a")
stack.pop()                    # "a"
try:
    stack.pop()
except EmptyStackError:
    pass
```

Parallel algorithms:

```python
from threadcraft.scan import parallel_partial_sum
from threadcraft.search import parallel_find
from threadcraft.sorting import parallel_quick_sort

parallel_quick_sort([5, 3, 9, 1])      # [1, 3, 5, 9]
parallel_partial_sum([1, 1, 1, 1])     # [1, 2, 3, 4]
parallel_find(list(range(100)), 42)    # 42
```

Matrices:

```python
from threadcraft.matrix import Matrix

a = Matrix(2, 3)
a.set_all(1)
a.set_value(0, 2, 5)

t = Matrix(3, 2)
Matrix.parallel_transpose(a, t)
print(t.format())
```

A thread pool that hands back results:

```python
from threadcraft.pools import WaitingThreadPool

with WaitingThreadPool(4) as pool:
    future = pool.submit(lambda: 6 * 7)
    print(future.result())     # 42
```

Synchronisation:

```python
import threading
from threadcraft.sync import Barrier, JoinThreads

barrier = Barrier(3)
threads = [threading.Thread(target=barrier.wait) for _ in range(3)]
with JoinThreads(threads):
    for t in threads:
        t.start()
```

## Command line

The `threadcraft` command times sequential and threaded variants of an
algorithm and prints one line per variant. It takes the name of the
benchmark to run:

```
threadcraft find                      # default size 1000000
threadcraft for_each                  # default size 1000
threadcraft scan                      # default size 1000
threadcraft sort --size 100000 --iterations 3
```

Each benchmark accepts `--size`. `sort` also takes `--iterations`, which
defaults to 5. It reports the lowest and highest value as well as the time.

## Limits

- `ParallelHashTable` never grows and cannot delete single items. Setting an
  item in a full table raises `RuntimeError`.
- Shutting a pool down stops its workers. Tasks still queued are dropped.
- The algorithms use plain Python threads. Timings therefore depend on how
  the interpreter schedules them, and the threaded variants are not promised
  to be faster.

## Running the tests

```
pip install .[test]
pytest
```