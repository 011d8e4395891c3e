# circuitsim/bench.py
import argparse, csv, os, platform, socket, time
from datetime import datetime
import numpy as np
from .circuit import Circuit

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

HEADER = ["qubits","depth","backend","threads","gates","wall_ms","hostname","dtype","timestamp","python"]

def new_csv(path):
    """Create/overwrite CSV with header."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writeheader()

def write_row(path, row):
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writerow(row)

def make_row(n, depth, backend, threads, gates, wall):
    return {
        "qubits": n, "depth": depth, "backend": backend, "threads": threads,
        "gates": gates, "wall_ms": f"{wall:.3f}",
        "hostname": socket.gethostname(), "dtype": "complex128",
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "python": platform.python_version(),
    }

# ---------------------------------------------------------------------

def random_circuit(n, depth, seed=0):
    """Even layers: H/X/RZ on every qubit. Odd layers: CNOT/CZ/SWAP on neighbours."""
    rng = np.random.default_rng(seed)
    c = Circuit.empty(n)
    for layer in range(depth):
        if layer % 2 == 0:
            for k in range(n):
                g = rng.integers(0, 3)
                if g == 0:
                    c.h(k)
                elif g == 1:
                    c.x(k)
                else:
                    c.rz(k, float(rng.uniform(0, 2*np.pi)))
        else:
            for k in range(0, n-1, 2):
                g = rng.integers(0, 3)
                if g == 0:
                    c.cnot(k, k+1)
                elif g == 1:
                    c.cz(k+1, k)
                else:
                    c.swap(k, k+1)
    return c

def time_run(circ, backend, threads=None):
    t0 = time.perf_counter()
    circ.run(backend=backend, num_threads=threads)
    return (time.perf_counter() - t0) * 1e3  # ms

def warmup(backend):
    # one small run so numba compiles before anything is timed
    random_circuit(2, 2).run(backend=backend)

def pool_threads(backend):
    if backend != "numba":
        return 1
    from .apply_numba import get_threads
    return get_threads()

# ---------------------------------------------------------------------
# individual experiments

def bench_qubits(ns, depth, backend, out_path):
    print(f"[run] Qubits scaling → {out_path}")
    new_csv(out_path)
    warmup(backend)
    for n in ns:
        circ = random_circuit(n, depth, seed=42)
        wall = time_run(circ, backend)
        write_row(out_path, make_row(n, depth, backend, pool_threads(backend), len(circ.ops), wall))
        print(f"  n={n}  wall={wall:.2f} ms")
    print("✓ done.\n")

def bench_depth(n, depths, backend, out_path):
    print(f"[run] Depth scaling → {out_path}")
    new_csv(out_path)
    warmup(backend)
    for d in depths:
        circ = random_circuit(n, d, seed=7)
        wall = time_run(circ, backend)
        write_row(out_path, make_row(n, d, backend, pool_threads(backend), len(circ.ops), wall))
        print(f"  depth={d}  wall={wall:.2f} ms")
    print("✓ done.\n")

def bench_threads(n, depth, threads_list, out_path):
    print(f"[run] Thread scaling → {out_path}")
    new_csv(out_path)
    from numba import config
    warmup("numba")
    circ = random_circuit(n, depth, seed=123)
    pool = config.NUMBA_NUM_THREADS
    t1 = time_run(circ, "numba", threads=1)
    print(f"  pool={pool}  T1={t1:.1f} ms")
    for t in threads_list:
        tt = min(int(t), pool)
        if tt != t:
            print(f"  requested t={t} > pool={pool}; using t={tt}")
        wall = time_run(circ, "numba", threads=tt)
        write_row(out_path, make_row(n, depth, "numba", tt, len(circ.ops), wall))
        print(f"  t={tt}  wall={wall:.2f} ms  speedup={t1 / wall if wall > 0 else float('nan'):.2f}×")
    print("✓ done.\n")

# ---------------------------------------------------------------------

def parse_ints(s):
    return [int(x) for x in s.split(",") if x.strip()]

def main(argv=None):
    p = argparse.ArgumentParser(description="circuitsim benchmarks → data/<backend>/*.csv")
    p.add_argument("--data-dir", type=str, default=DATA_DIR)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_qubits = sub.add_parser("qubits")
    p_qubits.add_argument("--ns", type=str, required=True)
    p_qubits.add_argument("--depth", type=int, default=100)
    p_qubits.add_argument("--backend", type=str, default="numba", choices=["serial","numba"])

    p_threads = sub.add_parser("threads")
    p_threads.add_argument("--n", type=int, default=16)
    p_threads.add_argument("--depth", type=int, default=200)
    p_threads.add_argument("--threads", type=str, default="1,2,4,8,16")

    p_depth = sub.add_parser("depth")
    p_depth.add_argument("--n", type=int, default=12)
    p_depth.add_argument("--depths", type=str, default="10,50,100,300,600")
    p_depth.add_argument("--backend", type=str, default="numba", choices=["serial","numba"])

    args = p.parse_args(argv)
    backend = getattr(args, "backend", "numba")
    base = os.path.join(args.data_dir, backend)

    if args.cmd == "qubits":
        bench_qubits(parse_ints(args.ns), args.depth, backend, os.path.join(base, "qubits.csv"))
    elif args.cmd == "threads":
        bench_threads(args.n, args.depth, parse_ints(args.threads), os.path.join(base, "threads.csv"))
    elif args.cmd == "depth":
        bench_depth(args.n, parse_ints(args.depths), backend, os.path.join(base, "depth.csv"))

if __name__ == "__main__":
    main()
