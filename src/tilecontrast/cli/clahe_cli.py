# --- file: tilecontrast/cli/clahe_cli.py ---
"""
Batch CLAHE runner: read → equalize (optionally downscale) → write.

Features
--------
- Grayscale inputs: TIFF (tifffile), PNG/JPEG (imageio) or headerless raw
  buffers (--raw-size W H).
- Fused CLAHE + downscale when --target is smaller than the source; the
  two-pass path (full-res CLAHE, then bilinear) via --method two_pass.
- Optional GPU backend (--device gpu|auto, requires CuPy).
- Optional before/after PNG previews and a summary.csv of QC numbers.

Examples
--------
python -m tilecontrast.cli.clahe_cli ^
  --input "D:/scans/*.png" ^
  --outdir "D:/scans/_clahe" ^
  --tiles 8 8 --clip 3.0 ^
  --target 640 480 --preview --stats

Outputs
-------
<name>_clahe.<fmt>        - equalized image (tif | png | raw)
<name>_clahe_preview.png  - before/after panel (if --preview)
summary.csv               - one row per file (if --stats)
"""

from __future__ import annotations
import os
import csv
import glob
import argparse
from typing import Any, Dict, Iterable, Optional, Tuple

import numpy as np

from tilecontrast.clahe import equalize, equalize_and_downscale, downscale_bilinear
from tilecontrast.io import read_gray_u8, read_raw_u8, write_gray_u8, as_buffer, from_buffer
from tilecontrast.summary import summary_stats, save_before_after


# ------------------------------- helpers ------------------------------------ #

def _basename_noext(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def _load(path: str, raw_size: Optional[Tuple[int, int]]) -> np.ndarray:
    if raw_size is not None:
        w, h = raw_size
        return read_raw_u8(path, w, h)
    return read_gray_u8(path, normalize="auto")


# ------------------------------- core --------------------------------------- #

def run_clahe(
    path: str,
    outdir: str,
    *,
    tiles: Tuple[int, int] = (8, 8),
    clip_limit: float = 3.0,
    target: Optional[Tuple[int, int]] = None,   # (width, height)
    method: str = "fused",
    device: str = "cpu",
    raw_size: Optional[Tuple[int, int]] = None,  # (width, height) for raw inputs
    out_format: str = "tif",                     # "tif" | "png" | "raw"
    preview: bool = False,
) -> Dict[str, Any]:
    """Process one file; return a row of stats (paths, sizes, QC numbers)."""
    if out_format not in ("tif", "png", "raw"):
        raise ValueError("out_format must be one of {'tif','png','raw'}")
    os.makedirs(outdir, exist_ok=True)
    base = _basename_noext(path)

    img = _load(path, raw_size)
    buf, W, H = as_buffer(img)
    gx, gy = (int(t) for t in tiles)

    if target is not None:
        tw, th = (int(t) for t in target)
        print(f"[clahe] {W}x{H} -> {tw}x{th} | tiles={gx}x{gy} clip={clip_limit} method={method}")
        out = equalize_and_downscale(buf, W, H, tw, th, gx, gy, clip_limit, method=method, device=device)
        if tw >= W and th >= H:  # passthrough at native size
            tw, th = W, H
    else:
        print(f"[clahe] {W}x{H} | tiles={gx}x{gy} clip={clip_limit}")
        out = equalize(buf, W, H, gx, gy, clip_limit, device=device)
        tw, th = W, H
    out_img = from_buffer(out, tw, th)

    out_path = os.path.join(outdir, f"{base}_clahe.{out_format}")
    write_gray_u8(out_path, out_img)
    print(f"  -> saved {out_path}")

    row: Dict[str, Any] = {
        "input": path,
        "output": out_path,
        "width": W,
        "height": H,
        "out_width": tw,
        "out_height": th,
    }
    row.update(summary_stats(img, out_img))

    if preview:
        # compare at output size
        before = img if (tw, th) == (W, H) else from_buffer(downscale_bilinear(buf, W, H, tw, th), tw, th)
        out_png = os.path.join(outdir, f"{base}_clahe_preview.png")
        save_before_after(out_png, before, out_img, titles=("Input", f"CLAHE clip={clip_limit}"))
        row["preview"] = out_png
        print(f"  -> saved {out_png}")

    print(f"[OK] {path}")
    return row


def write_summary_csv(rows: Iterable[Dict[str, Any]], path: str) -> str:
    rows = list(rows)
    with open(path, "w", newline="") as fw:
        w = csv.DictWriter(fw, fieldnames=list(rows[0].keys()), extrasaction="ignore")
        w.writeheader()
        for r in rows:
            w.writerow(r)
    return path


# ------------------------------- CLI ---------------------------------------- #

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="CLAHE on 8-bit grayscale images (optional fused downscale).")
    ap.add_argument("--input", required=True, help="Glob for input images, e.g. D:/scans/*.png")
    ap.add_argument("--outdir", required=True, help="Output directory")

    # CLAHE
    ap.add_argument("--tiles", type=int, nargs=2, default=(8, 8), metavar=("GX", "GY"), help="Tile grid (columns rows)")
    ap.add_argument("--clip", type=float, default=3.0, help="Clip limit; <= 0 disables clipping")

    # downscale
    ap.add_argument("--target", type=int, nargs=2, default=None, metavar=("W", "H"), help="Output size (downscale)")
    ap.add_argument("--method", choices=["fused", "two_pass"], default="fused", help="Downscale path")

    # backend / formats
    ap.add_argument("--device", choices=["cpu", "gpu", "auto"], default="cpu", help="Array backend")
    ap.add_argument("--raw-size", type=int, nargs=2, default=None, metavar=("W", "H"),
                    help="Treat inputs as headerless 8-bit buffers of this size")
    ap.add_argument("--format", dest="out_format", choices=["tif", "png", "raw"], default="tif",
                    help="Output format")

    # QC
    ap.add_argument("--preview", action="store_true", help="Save a before/after PNG per file")
    ap.add_argument("--stats", action="store_true", help="Write summary.csv to outdir")
    ap.add_argument("--progress", action="store_true", help="Show a progress bar over files")
    return ap


def main(argv: Iterable[str] | None = None) -> None:
    args = build_parser().parse_args(list(argv) if argv is not None else None)

    files = sorted(glob.glob(args.input))
    if not files:
        raise SystemExit(f"No files match: {args.input}")

    print(f"[clahe] files={len(files)} outdir={args.outdir}")
    it = files
    if args.progress:
        import sys
        from tqdm import tqdm
        it = tqdm(files, desc="CLAHE", file=sys.stdout)

    rows = []
    for f in it:
        try:
            rows.append(
                run_clahe(
                    f, args.outdir,
                    tiles=tuple(args.tiles),
                    clip_limit=args.clip,
                    target=(tuple(args.target) if args.target else None),
                    method=args.method,
                    device=args.device,
                    raw_size=(tuple(args.raw_size) if args.raw_size else None),
                    out_format=args.out_format,
                    preview=args.preview,
                )
            )
        except (ValueError, OSError) as e:
            print(f"[warn] skipped {f}: {e}")

    if args.stats:
        if rows:
            csv_path = write_summary_csv(rows, os.path.join(args.outdir, "summary.csv"))
            print(f"[OK] summary -> {csv_path}")
        else:
            print("[warn] no rows produced")


if __name__ == "__main__":
    main()
