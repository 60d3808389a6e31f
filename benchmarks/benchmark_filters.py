"""Benchmark the adjustment pipeline: NumPy backend vs Numba kernel.

Measures a full filter pass (every control active) on common image sizes,
plus the split-view compositor.
"""

from __future__ import annotations

import time

import numpy as np

from tonekit import FilterParameters, PixelBuffer, ViewCompositor, ViewMode, apply_filters

PARAMS = FilterParameters(
    exposure=12,
    contrast=25,
    highlights=-15,
    shadows=20,
    saturation=30,
    temperature=18,
    tint=-6,
    sepia=40,
)


def benchmark_operation(name: str, numpy_fn, numba_fn, iterations: int = 20):
    """Benchmark a single operation comparing NumPy vs Numba.

    :param name: Operation name
    :param numpy_fn: NumPy backend call
    :param numba_fn: Numba backend call
    :param iterations: Number of iterations to run
    :returns: Tuple of (numpy_time, numba_time, speedup)
    """
    # Warmup (includes JIT compilation)
    numpy_fn()
    numba_fn()

    start = time.perf_counter()
    for _ in range(iterations):
        numpy_fn()
    numpy_time = (time.perf_counter() - start) / iterations

    start = time.perf_counter()
    for _ in range(iterations):
        numba_fn()
    numba_time = (time.perf_counter() - start) / iterations

    speedup = numpy_time / numba_time

    print(f"\n{name}:")
    print(f"  NumPy:  {numpy_time * 1000:.3f} ms")
    print(f"  Numba:  {numba_time * 1000:.3f} ms")
    print(f"  Speedup: {speedup:.2f}x")

    return numpy_time, numba_time, speedup


def main():
    """Run benchmarks over several image sizes."""
    print("=" * 70)
    print("Adjustment Pipeline Performance Benchmark")
    print("=" * 70)

    sizes = [
        (640, 480, "VGA (0.3 MP)"),
        (1920, 1080, "Full HD (2.1 MP)"),
        (4000, 3000, "12 MP photo"),
    ]

    rng = np.random.default_rng(42)
    compositor = ViewCompositor()
    speedups = []

    for width, height, size_name in sizes:
        print(f"\n{'=' * 70}")
        print(f"{size_name}: {width}x{height}")
        print(f"{'=' * 70}")

        original = PixelBuffer.from_array(
            rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8), copy=False
        )
        out = PixelBuffer.empty(width, height)

        _, _, speedup = benchmark_operation(
            "Full pipeline",
            lambda: apply_filters(original, PARAMS, out=out, backend="numpy"),
            lambda: apply_filters(original, PARAMS, out=out, backend="numba"),
        )
        speedups.append(speedup)

        # Split view over the filtered result
        filtered = apply_filters(original, PARAMS)
        start = time.perf_counter()
        for _ in range(20):
            compositor.present(original, filtered, ViewMode.SPLIT, "dark")
        split_time = (time.perf_counter() - start) / 20
        print(f"\nSplit view: {split_time * 1000:.3f} ms")

    print(f"\n{'=' * 70}")
    print("Benchmark Complete!")
    print(f"{'=' * 70}")
    print(f"Average Numba speedup: {sum(speedups) / len(speedups):.2f}x")


if __name__ == "__main__":
    main()
