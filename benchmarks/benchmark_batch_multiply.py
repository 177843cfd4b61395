import functools
import time

import numpy as np

import mathgl


def _chain(count, n, rng):
    return [mathgl.Matrix.from_numpy(rng.standard_normal((n, n))) for _ in range(count)]


def run_benchmark():
    rng = np.random.default_rng(0)
    N = 256
    workers = mathgl.get_max_workers()

    print("-" * 60)
    print(f"Benchmark: chain product of {N}x{N} (float64), {workers} workers")
    print("-" * 60)
    print(f"{'count':>6} {'sequential':>12} {'batch':>12} {'speedup':>8}")

    for count in (2, 4, 6, 8, 12, 16):
        chain = _chain(count, N, rng)

        # Warmup
        _ = mathgl.batch_multiply(chain[:2])

        start_seq = time.perf_counter()
        seq = functools.reduce(lambda a, b: a @ b, chain)
        time_seq = time.perf_counter() - start_seq

        start_batch = time.perf_counter()
        out = mathgl.batch_multiply(chain)
        time_batch = time.perf_counter() - start_batch

        if not np.allclose(out.to_numpy(), seq.to_numpy()):
            print(f"MISMATCH at count={count}")
            return

        print(f"{count:>6} {time_seq:>11.4f}s {time_batch:>11.4f}s {time_seq / time_batch:>7.2f}x")

    print("-" * 60)
    trace = mathgl.last_batch_trace()
    if trace is not None:
        print(f"Last trace: forked={trace['forked_tasks']} inline={trace['inline_fallbacks']} depth={trace['fork_depth']}")


if __name__ == "__main__":
    run_benchmark()
