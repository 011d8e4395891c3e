# circuitsim/plot_results.py
import csv, os, sys
from collections import defaultdict
from statistics import median
import matplotlib.pyplot as plt

from .bench import DATA_DIR

def load_rows(path):
    rows = []
    with open(path, "r") as f:
        for row in csv.DictReader(f):
            row["qubits"]  = int(row["qubits"])
            row["depth"]   = int(row["depth"])
            row["threads"] = int(row["threads"])
            row["wall_ms"] = float(row["wall_ms"])
            rows.append(row)
    return rows

def median_by(rows, field):
    """{field value: median wall_ms} over rows sharing that value."""
    buckets = defaultdict(list)
    for r in rows:
        buckets[r[field]].append(r["wall_ms"])
    return {k: float(median(v)) for k, v in sorted(buckets.items())}

def _save(out_path):
    plt.grid(True, which="both", ls="--", lw=0.5)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()
    return out_path

def plot_runtime_vs(rows, field, label, out_path, log=False):
    pts = median_by(rows, field)
    if not pts:
        return None
    plt.figure()
    plt.plot(list(pts.keys()), list(pts.values()), marker="o")
    plt.xlabel(label)
    plt.ylabel("Runtime (ms)")
    plt.title(f"Runtime vs {label}")
    if log:
        plt.yscale("log")
    return _save(out_path)

def plot_speedup_vs_threads(rows, out_path):
    pts = median_by(rows, "threads")
    t1 = pts.get(1)
    if not t1:
        return None
    plt.figure()
    plt.plot(list(pts.keys()), [t1 / v for v in pts.values()], marker="o")
    plt.xlabel("Threads")
    plt.ylabel("Speedup (T1/Tt)")
    plt.title("Speedup vs Threads")
    return _save(out_path)

def plot_csv(path):
    """Plot one data/<backend>/<experiment>.csv next to itself; return written PNGs."""
    rows = load_rows(path)
    out_dir = os.path.dirname(path)
    tag = os.path.splitext(os.path.basename(path))[0]
    written = []
    if tag.startswith("qubits"):
        written.append(plot_runtime_vs(rows, "qubits", "Qubits (n)",
                                       os.path.join(out_dir, "runtime_vs_qubits.png"), log=True))
    elif tag.startswith("depth"):
        written.append(plot_runtime_vs(rows, "depth", "Depth",
                                       os.path.join(out_dir, "runtime_vs_depth.png")))
    elif tag.startswith("threads"):
        written.append(plot_runtime_vs(rows, "threads", "Threads",
                                       os.path.join(out_dir, "runtime_vs_threads.png")))
        written.append(plot_speedup_vs_threads(rows, os.path.join(out_dir, "speedup_vs_threads.png")))
    return [w for w in written if w]

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    data_dir = argv[0] if argv else DATA_DIR
    csvs = []
    for root, _, files in os.walk(data_dir):
        csvs.extend(os.path.join(root, f) for f in files if f.endswith(".csv"))
    if not csvs:
        print(f"No CSV files found under {data_dir}")
        return []

    written = []
    for path in sorted(csvs):
        print(f"Plotting {path}...")
        written.extend(plot_csv(path))
    print(f"\nSaved {len(written)} plot(s) under {data_dir}")
    return written

if __name__ == "__main__":
    main()
